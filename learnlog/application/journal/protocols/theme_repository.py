"""Protocol for Theme repository operations."""

from datetime import datetime
from typing import Protocol

from learnlog.application.common.pagination import PageRequest
from learnlog.application.journal.cursors import ThemeCursor
from learnlog.application.journal.dtos import ThemeDeletion, ThemeListFilters
from learnlog.domain.common.value_objects.ids import OwnerId, ThemeId
from learnlog.domain.journal.entities import Theme, ThemeSummary


class ThemeRepositoryProtocol(Protocol):
    """Protocol defining the interface for owner-scoped Theme persistence."""

    def find_page(
        self, owner_id: OwnerId, filters: ThemeListFilters, page: PageRequest[ThemeCursor]
    ) -> list[Theme]:
        """Return up to ``page.fetch_size`` themes in ``(created_at, id)`` order."""
        ...

    def find_by_id(self, theme_id: ThemeId, owner_id: OwnerId) -> Theme | None: ...

    def find_summaries(
        self, theme_ids: list[ThemeId], owner_id: OwnerId
    ) -> list[ThemeSummary]:
        """Return the visible themes among ``theme_ids``, in the given order."""
        ...

    def save(self, theme: Theme) -> Theme: ...

    def update(
        self, theme_id: ThemeId, owner_id: OwnerId, changes: dict[str, object]
    ) -> Theme | None: ...

    def soft_delete(
        self, theme_id: ThemeId, owner_id: OwnerId, now: datetime
    ) -> ThemeDeletion | None:
        """Delete a theme with its logs and linked notes; None if nothing matched."""
        ...
