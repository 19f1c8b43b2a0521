"""Use case for theme operations."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from learnlog.application.common.pagination import CursorPage, PageRequest, paginate
from learnlog.application.journal.cursors import ThemeCursor
from learnlog.application.journal.dtos import ThemeCreateData, ThemeListFilters, ThemePatch
from learnlog.application.journal.protocols.theme_repository import ThemeRepositoryProtocol
from learnlog.domain.common.value_objects.ids import OwnerId, ThemeId
from learnlog.domain.journal.entities import Theme
from learnlog.exceptions import BadRequestError, ThemeNotFoundError
from learnlog.utils import utcnow

logger = structlog.get_logger(__name__)


class ThemeUseCase:
    def __init__(
        self,
        theme_repository: ThemeRepositoryProtocol,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.theme_repository = theme_repository
        self.clock = clock

    def list_themes(
        self,
        owner_id: UUID,
        filters: ThemeListFilters,
        limit: int,
        cursor: str | None = None,
    ) -> CursorPage[Theme]:
        """
        List the owner's themes, oldest first.

        Args:
            owner_id: Owner of the themes
            filters: Completed/archived visibility flags
            limit: Page size
            cursor: Opaque cursor from a previous page

        Returns:
            One page of themes and the cursor of the next page

        Raises:
            InvalidCursorError: If the cursor cannot be decoded
        """
        page = PageRequest(limit=limit, cursor=ThemeCursor.decode(cursor) if cursor else None)
        rows = self.theme_repository.find_page(OwnerId(owner_id), filters, page)
        return paginate(rows, page.limit, lambda theme: ThemeCursor.of(theme).encode())

    def get_theme(self, owner_id: UUID, theme_id: UUID) -> Theme:
        theme = self.theme_repository.find_by_id(ThemeId(theme_id), OwnerId(owner_id))
        if theme is None:
            raise ThemeNotFoundError(theme_id)
        return theme

    def create_theme(self, owner_id: UUID, data: ThemeCreateData) -> Theme:
        theme = Theme.create(
            owner_id=OwnerId(owner_id),
            name=data.name,
            goal=data.goal,
            short_name=data.short_name,
            is_completed=data.is_completed,
        )
        theme = self.theme_repository.save(theme)

        logger.info("created_theme", theme_id=str(theme.id), owner_id=str(owner_id))
        return theme

    def update_theme(self, owner_id: UUID, theme_id: UUID, patch: ThemePatch) -> Theme:
        """
        Apply a partial update to a non-deleted theme.

        Raises:
            BadRequestError: If the patch is empty
            ThemeNotFoundError: If the theme is missing, deleted or not owned
        """
        changes = patch.changes()
        if not changes:
            raise BadRequestError("At least one field must be provided")

        theme = self.theme_repository.update(ThemeId(theme_id), OwnerId(owner_id), changes)
        if theme is None:
            raise ThemeNotFoundError(theme_id)

        logger.info("updated_theme", theme_id=str(theme_id), fields=sorted(changes))
        return theme

    def delete_theme(self, owner_id: UUID, theme_id: UUID) -> None:
        """
        Logically delete a theme, its logs and every note linked to it.

        Raises:
            ThemeNotFoundError: If the theme is missing, already deleted or not owned
        """
        deletion = self.theme_repository.soft_delete(
            ThemeId(theme_id), OwnerId(owner_id), self.clock()
        )
        if deletion is None:
            raise ThemeNotFoundError(theme_id)

        logger.info(
            "deleted_theme_cascade",
            theme_id=str(theme_id),
            log_count=deletion.log_count,
            note_count=deletion.note_count,
        )
