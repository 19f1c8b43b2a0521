"""Use case for meta note operations."""

from collections.abc import Callable
from datetime import datetime, tzinfo
from uuid import UUID

import structlog

from learnlog.application.common.pagination import CursorPage, PageRequest, paginate
from learnlog.application.journal.cursors import NoteCursor
from learnlog.application.journal.dtos import (
    NoteCreateData,
    NoteDetails,
    NoteListFilters,
    NotePatch,
)
from learnlog.application.journal.protocols.log_repository import LogRepositoryProtocol
from learnlog.application.journal.protocols.note_repository import NoteRepositoryProtocol
from learnlog.application.journal.protocols.theme_repository import ThemeRepositoryProtocol
from learnlog.domain.common.value_objects.ids import LogId, NoteId, OwnerId, ThemeId
from learnlog.domain.journal.entities import MetaNote
from learnlog.exceptions import (
    BadRequestError,
    NoteNotFoundError,
    ReferencedResourceNotFoundError,
)
from learnlog.utils import local_today, utcnow

logger = structlog.get_logger(__name__)

REFERENCE_NOT_FOUND_MESSAGE = "Referenced theme or log not found"


class NoteUseCase:
    def __init__(
        self,
        note_repository: NoteRepositoryProtocol,
        theme_repository: ThemeRepositoryProtocol,
        log_repository: LogRepositoryProtocol,
        note_zone: tzinfo,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.note_repository = note_repository
        self.theme_repository = theme_repository
        self.log_repository = log_repository
        self.note_zone = note_zone
        self.clock = clock

    def list_notes(
        self,
        owner_id: UUID,
        filters: NoteListFilters,
        limit: int,
        cursor: str | None = None,
    ) -> CursorPage[MetaNote]:
        """List the owner's notes, newest note date first."""
        page = PageRequest(limit=limit, cursor=NoteCursor.decode(cursor) if cursor else None)
        rows = self.note_repository.find_page(OwnerId(owner_id), filters, page)
        return paginate(rows, page.limit, lambda note: NoteCursor.of(note).encode())

    def get_note(self, owner_id: UUID, note_id: UUID) -> NoteDetails:
        """
        Get a note with its related log and linked themes.

        A related log that has since been deleted is reported as absent.

        Raises:
            NoteNotFoundError: If the note is missing, deleted or not owned
        """
        owner = OwnerId(owner_id)
        note = self.note_repository.find_by_id(NoteId(note_id), owner)
        if note is None:
            raise NoteNotFoundError(note_id)

        related_log = (
            self.log_repository.find_summary(note.related_log_id, owner)
            if note.related_log_id is not None
            else None
        )
        themes = self.theme_repository.find_summaries(note.theme_ids, owner)
        return NoteDetails(note=note, related_log=related_log, themes=themes)

    def create_note(self, owner_id: UUID, data: NoteCreateData) -> MetaNote:
        """
        Create a note dated today in the reference timezone.

        Raises:
            ReferencedResourceNotFoundError: If a theme or the related log is
                not visible to the owner
        """
        owner = OwnerId(owner_id)
        theme_ids = list(dict.fromkeys(data.theme_ids))
        self._ensure_references(owner, theme_ids, data.related_log_id)

        note = MetaNote.create(
            owner_id=owner,
            category=data.category,
            body=data.body,
            note_date=local_today(self.note_zone, self.clock()),
            theme_ids=theme_ids,
            related_log_id=data.related_log_id,
        )
        note = self.note_repository.save(note)

        logger.info(
            "created_note",
            note_id=str(note.id),
            category=note.category.value,
            theme_count=len(theme_ids),
            has_related_log=note.related_log_id is not None,
        )
        return note

    def update_note(self, owner_id: UUID, note_id: UUID, patch: NotePatch) -> MetaNote:
        """
        Apply a partial update to a non-deleted note.

        ``theme_ids``, when present, replaces the whole link set. The note date
        is never modified.

        Raises:
            BadRequestError: If the patch is empty
            ReferencedResourceNotFoundError: If a new theme or log reference is
                not visible to the owner
            NoteNotFoundError: If the note is missing, deleted or not owned
        """
        changes = patch.changes()
        if not changes:
            raise BadRequestError("At least one field must be provided")

        owner = OwnerId(owner_id)
        changes.pop("theme_ids", None)
        theme_ids = (
            list(dict.fromkeys(patch.theme_ids)) if isinstance(patch.theme_ids, list) else None
        )
        related_log_id = patch.related_log_id if isinstance(patch.related_log_id, LogId) else None
        self._ensure_references(owner, theme_ids or [], related_log_id)

        note = self.note_repository.update(NoteId(note_id), owner, changes, theme_ids)
        if note is None:
            raise NoteNotFoundError(note_id)

        fields = sorted([*changes, *(["theme_ids"] if theme_ids is not None else [])])
        logger.info("updated_note", note_id=str(note_id), fields=fields)
        return note

    def delete_note(self, owner_id: UUID, note_id: UUID) -> None:
        if not self.note_repository.soft_delete(NoteId(note_id), OwnerId(owner_id), self.clock()):
            raise NoteNotFoundError(note_id)

        logger.info("deleted_note", note_id=str(note_id))

    def _ensure_references(
        self, owner: OwnerId, theme_ids: list[ThemeId], related_log_id: LogId | None
    ) -> None:
        if theme_ids:
            found = self.theme_repository.find_summaries(theme_ids, owner)
            if len(found) != len(theme_ids):
                raise ReferencedResourceNotFoundError(REFERENCE_NOT_FOUND_MESSAGE)
        if related_log_id is not None:
            if self.log_repository.find_summary(related_log_id, owner) is None:
                raise ReferencedResourceNotFoundError(REFERENCE_NOT_FOUND_MESSAGE)
