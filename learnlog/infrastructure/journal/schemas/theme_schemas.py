"""Pydantic schemas for Theme API request/response validation."""

from datetime import datetime
from uuid import UUID

from learnlog.domain.common.resource_state import ResourceState
from learnlog.domain.journal.entities import Theme
from learnlog.infrastructure.common.schemas import CamelModel, RequestModel
from learnlog.infrastructure.journal.schemas.field_types import (
    OptionalText,
    PatchFlag,
    PatchText,
    RequiredText,
    StrictFlag,
)


class ThemeCreateRequest(RequestModel):
    name: RequiredText
    goal: RequiredText
    short_name: OptionalText = None
    is_completed: StrictFlag = False


class ThemePatchRequest(RequestModel):
    """All fields optional; ``shortName: null`` clears the short name."""

    name: PatchText = None
    goal: PatchText = None
    short_name: OptionalText = None
    is_completed: PatchFlag = None


class ThemeResponse(CamelModel):
    id: UUID
    owner_id: UUID
    name: str
    short_name: str | None
    goal: str
    is_completed: bool
    state: ResourceState
    state_changed_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, theme: Theme) -> "ThemeResponse":
        return cls(
            id=theme.id.value,
            owner_id=theme.owner_id.value,
            name=theme.name,
            short_name=theme.short_name,
            goal=theme.goal,
            is_completed=theme.is_completed,
            state=theme.state,
            state_changed_at=theme.state_changed_at,
            created_at=theme.created_at,
            updated_at=theme.updated_at,
        )


class ThemeSummaryResponse(CamelModel):
    id: UUID
    name: str
