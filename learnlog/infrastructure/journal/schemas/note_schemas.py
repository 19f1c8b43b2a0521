"""Pydantic schemas for MetaNote API request/response validation."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from learnlog.application.journal.dtos import NoteDetails
from learnlog.domain.common.resource_state import ResourceState
from learnlog.domain.journal.entities import MetaNote, MetaNoteCategory
from learnlog.infrastructure.common.schemas import CamelModel, RequestModel
from learnlog.infrastructure.journal.schemas.field_types import (
    Category,
    OptionalUuid,
    PatchCategory,
    PatchText,
    PatchUuidList,
    RequiredText,
    UuidList,
)
from learnlog.infrastructure.journal.schemas.log_schemas import LogSummaryResponse
from learnlog.infrastructure.journal.schemas.theme_schemas import ThemeSummaryResponse


class NoteCreateRequest(RequestModel):
    """``noteDate`` is assigned by the server; a client value is ignored."""

    category: Category
    body: RequiredText
    theme_ids: UuidList = Field(default_factory=list)
    related_log_id: OptionalUuid = None


class NotePatchRequest(RequestModel):
    category: PatchCategory = None
    body: PatchText = None
    theme_ids: PatchUuidList = None
    related_log_id: OptionalUuid = None


class NoteResponse(CamelModel):
    id: UUID
    owner_id: UUID
    category: MetaNoteCategory
    body: str
    note_date: date
    related_log_id: UUID | None
    theme_ids: list[UUID]
    state: ResourceState
    state_changed_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, note: MetaNote) -> "NoteResponse":
        return cls(
            id=note.id.value,
            owner_id=note.owner_id.value,
            category=note.category,
            body=note.body,
            note_date=note.note_date,
            related_log_id=note.related_log_id.value if note.related_log_id else None,
            theme_ids=[theme_id.value for theme_id in note.theme_ids],
            state=note.state,
            state_changed_at=note.state_changed_at,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteDetailResponse(NoteResponse):
    """Note with its related log (null when absent or deleted) and linked themes."""

    related_log: LogSummaryResponse | None
    themes: list[ThemeSummaryResponse]

    @classmethod
    def from_details(cls, details: NoteDetails) -> "NoteDetailResponse":
        base = NoteResponse.from_domain(details.note)
        return cls(
            **base.model_dump(),
            related_log=(
                LogSummaryResponse.from_domain(details.related_log)
                if details.related_log
                else None
            ),
            themes=[
                ThemeSummaryResponse(id=theme.id.value, name=theme.name)
                for theme in details.themes
            ],
        )
