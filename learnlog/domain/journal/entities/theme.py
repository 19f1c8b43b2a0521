"""Theme entity: a learning goal tracked by a user."""

from dataclasses import dataclass
from datetime import datetime

from learnlog.domain.common.entity import Entity
from learnlog.domain.common.exceptions import ValidationError
from learnlog.domain.common.resource_state import INITIAL_STATE, ResourceState
from learnlog.domain.common.value_objects.ids import OwnerId, ThemeId


@dataclass(eq=False)
class Theme(Entity[ThemeId]):
    """
    A learning goal with a name and a goal statement.

    Business Rules:
    - Name and goal must be non-empty
    - Short name is optional; blank means absent
    - Belongs to exactly one owner for its whole life
    """

    id: ThemeId
    owner_id: OwnerId
    name: str
    goal: str
    short_name: str | None = None
    is_completed: bool = False
    state: ResourceState = INITIAL_STATE
    state_changed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name or not self.name.strip():
            raise ValidationError("Theme name cannot be empty", field="name")
        if not self.goal or not self.goal.strip():
            raise ValidationError("Theme goal cannot be empty", field="goal")

    @property
    def is_archived(self) -> bool:
        return self.state is ResourceState.ARCHIVED

    @classmethod
    def create(
        cls,
        owner_id: OwnerId,
        name: str,
        goal: str,
        short_name: str | None = None,
        is_completed: bool = False,
    ) -> "Theme":
        """
        Create a new theme in the initial state.

        Identifiers and timestamps are left to the storage layer.
        """
        return cls(
            id=ThemeId.generate(),
            owner_id=owner_id,
            name=name,
            goal=goal,
            short_name=short_name,
            is_completed=is_completed,
        )


@dataclass(frozen=True)
class ThemeSummary:
    """Minimal theme projection embedded in log and note details."""

    id: ThemeId
    name: str
