"""Protocol for LearningLogEntry repository operations."""

from datetime import datetime
from typing import Protocol

from learnlog.application.common.pagination import PageRequest
from learnlog.application.journal.cursors import LogCursor
from learnlog.application.journal.dtos import LogListFilters
from learnlog.domain.common.value_objects.ids import LogId, OwnerId
from learnlog.domain.journal.entities import LearningLogEntry, LogSummary


class LogRepositoryProtocol(Protocol):
    """Protocol defining the interface for owner-scoped log persistence."""

    def find_page(
        self, owner_id: OwnerId, filters: LogListFilters, page: PageRequest[LogCursor]
    ) -> list[LearningLogEntry]: ...

    def find_by_id(self, log_id: LogId, owner_id: OwnerId) -> LearningLogEntry | None: ...

    def find_summary(self, log_id: LogId, owner_id: OwnerId) -> LogSummary | None: ...

    def save(self, log: LearningLogEntry) -> LearningLogEntry: ...

    def update(
        self, log_id: LogId, owner_id: OwnerId, changes: dict[str, object]
    ) -> LearningLogEntry | None: ...

    def soft_delete(self, log_id: LogId, owner_id: OwnerId, now: datetime) -> bool: ...
