"""Pydantic schemas for LearningLogEntry API request/response validation."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from learnlog.application.journal.dtos import LogDetails
from learnlog.domain.common.resource_state import ResourceState
from learnlog.domain.journal.entities import LearningLogEntry, LogSummary
from learnlog.infrastructure.common.schemas import CamelModel, RequestModel
from learnlog.infrastructure.journal.schemas.field_types import (
    CalendarDate,
    OptionalText,
    PatchStringList,
    PatchText,
    RequiredText,
    RequiredUuid,
    StringList,
)
from learnlog.infrastructure.journal.schemas.theme_schemas import ThemeSummaryResponse


class LogCreateRequest(RequestModel):
    theme_id: RequiredUuid
    date: CalendarDate
    summary: RequiredText
    details: OptionalText = None
    tags: StringList = Field(default_factory=list)


class LogPatchRequest(RequestModel):
    """Theme and date of a log are fixed at creation."""

    summary: PatchText = None
    details: OptionalText = None
    tags: PatchStringList = None


class LogResponse(CamelModel):
    id: UUID
    owner_id: UUID
    theme_id: UUID
    date: date
    summary: str
    details: str | None
    tags: list[str]
    state: ResourceState
    state_changed_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, log: LearningLogEntry) -> "LogResponse":
        return cls(
            id=log.id.value,
            owner_id=log.owner_id.value,
            theme_id=log.theme_id.value,
            date=log.date,
            summary=log.summary,
            details=log.details,
            tags=list(log.tags),
            state=log.state,
            state_changed_at=log.state_changed_at,
            created_at=log.created_at,
            updated_at=log.updated_at,
        )


class LogDetailResponse(LogResponse):
    """Log with the id and name of its theme."""

    theme: ThemeSummaryResponse

    @classmethod
    def from_details(cls, details: LogDetails) -> "LogDetailResponse":
        base = LogResponse.from_domain(details.log)
        return cls(
            **base.model_dump(),
            theme=ThemeSummaryResponse(id=details.theme.id.value, name=details.theme.name),
        )


class LogSummaryResponse(CamelModel):
    id: UUID
    theme_id: UUID
    date: date
    summary: str

    @classmethod
    def from_domain(cls, summary: LogSummary) -> "LogSummaryResponse":
        return cls(
            id=summary.id.value,
            theme_id=summary.theme_id.value,
            date=summary.date,
            summary=summary.summary,
        )
