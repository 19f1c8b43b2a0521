"""LearningLogEntry entity: what a user did for a theme on a given day."""

from dataclasses import dataclass, field
from datetime import date, datetime

from learnlog.domain.common.entity import Entity
from learnlog.domain.common.exceptions import ValidationError
from learnlog.domain.common.resource_state import INITIAL_STATE, ResourceState
from learnlog.domain.common.value_objects.ids import LogId, OwnerId, ThemeId


@dataclass(eq=False)
class LearningLogEntry(Entity[LogId]):
    """
    Daily learning log for one theme.

    Business Rules:
    - Summary must be non-empty
    - The theme must belong to the same owner (enforced by the storage layer)
    - At most one non-deleted log per (owner, theme, date), enforced by a
      unique index rather than a read-before-write check
    - ``date`` is a calendar date, not an instant
    """

    id: LogId
    owner_id: OwnerId
    theme_id: ThemeId
    date: date
    summary: str
    details: str | None = None
    tags: list[str] = field(default_factory=list)
    state: ResourceState = INITIAL_STATE
    state_changed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.summary or not self.summary.strip():
            raise ValidationError("Log summary cannot be empty", field="summary")

    @classmethod
    def create(
        cls,
        owner_id: OwnerId,
        theme_id: ThemeId,
        log_date: date,
        summary: str,
        details: str | None = None,
        tags: list[str] | None = None,
    ) -> "LearningLogEntry":
        """Create a new log entry in the initial state."""
        return cls(
            id=LogId.generate(),
            owner_id=owner_id,
            theme_id=theme_id,
            date=log_date,
            summary=summary,
            details=details,
            tags=list(tags) if tags else [],
        )


@dataclass(frozen=True)
class LogSummary:
    """Small projection of a log embedded in note details."""

    id: LogId
    theme_id: ThemeId
    date: date
    summary: str
