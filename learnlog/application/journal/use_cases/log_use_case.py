"""Use case for learning log operations."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from learnlog.application.common.pagination import CursorPage, PageRequest, paginate
from learnlog.application.journal.cursors import LogCursor
from learnlog.application.journal.dtos import LogCreateData, LogDetails, LogListFilters, LogPatch
from learnlog.application.journal.protocols.log_repository import LogRepositoryProtocol
from learnlog.application.journal.protocols.theme_repository import ThemeRepositoryProtocol
from learnlog.domain.common.value_objects.ids import LogId, OwnerId
from learnlog.domain.journal.entities import LearningLogEntry
from learnlog.exceptions import (
    BadRequestError,
    LogNotFoundError,
    ReferencedResourceNotFoundError,
)
from learnlog.utils import utcnow

logger = structlog.get_logger(__name__)


class LogUseCase:
    def __init__(
        self,
        log_repository: LogRepositoryProtocol,
        theme_repository: ThemeRepositoryProtocol,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.log_repository = log_repository
        self.theme_repository = theme_repository
        self.clock = clock

    def list_logs(
        self,
        owner_id: UUID,
        filters: LogListFilters,
        limit: int,
        cursor: str | None = None,
    ) -> CursorPage[LearningLogEntry]:
        """List the owner's logs, newest date first."""
        page = PageRequest(limit=limit, cursor=LogCursor.decode(cursor) if cursor else None)
        rows = self.log_repository.find_page(OwnerId(owner_id), filters, page)
        return paginate(rows, page.limit, lambda log: LogCursor.of(log).encode())

    def get_log(self, owner_id: UUID, log_id: UUID) -> LogDetails:
        """
        Get a log together with the id and name of its theme.

        Raises:
            LogNotFoundError: If the log is missing, deleted or not owned
        """
        owner = OwnerId(owner_id)
        log = self.log_repository.find_by_id(LogId(log_id), owner)
        if log is None:
            raise LogNotFoundError(log_id)

        themes = self.theme_repository.find_summaries([log.theme_id], owner)
        if not themes:
            # A live log always has a live theme; anything else is a dangling row
            logger.warning("log_without_visible_theme", log_id=str(log_id))
            raise LogNotFoundError(log_id)
        return LogDetails(log=log, theme=themes[0])

    def create_log(self, owner_id: UUID, data: LogCreateData) -> LearningLogEntry:
        """
        Create a log for one of the owner's themes.

        Uniqueness of (theme, date) is left to the storage layer: a duplicate
        surfaces as an integrity error from ``save``.

        Raises:
            ReferencedResourceNotFoundError: If the theme is not visible to the owner
        """
        owner = OwnerId(owner_id)
        if not self.theme_repository.find_summaries([data.theme_id], owner):
            raise ReferencedResourceNotFoundError("Referenced theme not found")

        log = LearningLogEntry.create(
            owner_id=owner,
            theme_id=data.theme_id,
            log_date=data.date,
            summary=data.summary,
            details=data.details,
            tags=data.tags,
        )
        log = self.log_repository.save(log)

        logger.info(
            "created_log",
            log_id=str(log.id),
            theme_id=str(data.theme_id),
            date=data.date.isoformat(),
        )
        return log

    def update_log(self, owner_id: UUID, log_id: UUID, patch: LogPatch) -> LearningLogEntry:
        changes = patch.changes()
        if not changes:
            raise BadRequestError("At least one field must be provided")

        log = self.log_repository.update(LogId(log_id), OwnerId(owner_id), changes)
        if log is None:
            raise LogNotFoundError(log_id)

        logger.info("updated_log", log_id=str(log_id), fields=sorted(changes))
        return log

    def delete_log(self, owner_id: UUID, log_id: UUID) -> None:
        if not self.log_repository.soft_delete(LogId(log_id), OwnerId(owner_id), self.clock()):
            raise LogNotFoundError(log_id)

        logger.info("deleted_log", log_id=str(log_id))
