"""Protocol for MetaNote repository operations."""

from datetime import datetime
from typing import Protocol

from learnlog.application.common.pagination import PageRequest
from learnlog.application.journal.cursors import NoteCursor
from learnlog.application.journal.dtos import NoteListFilters
from learnlog.domain.common.value_objects.ids import NoteId, OwnerId, ThemeId
from learnlog.domain.journal.entities import MetaNote


class NoteRepositoryProtocol(Protocol):
    """Protocol defining the interface for owner-scoped note persistence."""

    def find_page(
        self, owner_id: OwnerId, filters: NoteListFilters, page: PageRequest[NoteCursor]
    ) -> list[MetaNote]: ...

    def find_by_id(self, note_id: NoteId, owner_id: OwnerId) -> MetaNote | None: ...

    def save(self, note: MetaNote) -> MetaNote:
        """Insert the note and its theme links in one transaction."""
        ...

    def update(
        self,
        note_id: NoteId,
        owner_id: OwnerId,
        changes: dict[str, object],
        theme_ids: list[ThemeId] | None = None,
    ) -> MetaNote | None:
        """Apply ``changes``; when ``theme_ids`` is given, replace the link set."""
        ...

    def soft_delete(self, note_id: NoteId, owner_id: OwnerId, now: datetime) -> bool: ...
