"""MetaNote entity: a reflection about the learning process."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

from learnlog.domain.common.entity import Entity
from learnlog.domain.common.exceptions import ValidationError
from learnlog.domain.common.resource_state import INITIAL_STATE, ResourceState
from learnlog.domain.common.value_objects.ids import LogId, NoteId, OwnerId, ThemeId


class MetaNoteCategory(StrEnum):
    """Kind of reflection a note records."""

    INSIGHT = "INSIGHT"
    QUESTION = "QUESTION"
    EMOTION = "EMOTION"


@dataclass(eq=False)
class MetaNote(Entity[NoteId]):
    """
    Free-form reflection, optionally linked to themes and one log.

    Business Rules:
    - Body must be non-empty
    - ``note_date`` is assigned once at creation from the server clock in the
      configured reference timezone and never changes afterwards
    - Theme links are owned by the note; updating them replaces the whole set
    """

    id: NoteId
    owner_id: OwnerId
    category: MetaNoteCategory
    body: str
    note_date: date
    related_log_id: LogId | None = None
    theme_ids: list[ThemeId] = field(default_factory=list)
    state: ResourceState = INITIAL_STATE
    state_changed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.body or not self.body.strip():
            raise ValidationError("Note body cannot be empty", field="body")

    @classmethod
    def create(
        cls,
        owner_id: OwnerId,
        category: MetaNoteCategory,
        body: str,
        note_date: date,
        theme_ids: list[ThemeId] | None = None,
        related_log_id: LogId | None = None,
    ) -> "MetaNote":
        """Create a new note dated ``note_date``."""
        return cls(
            id=NoteId.generate(),
            owner_id=owner_id,
            category=category,
            body=body,
            note_date=note_date,
            related_log_id=related_log_id,
            theme_ids=list(dict.fromkeys(theme_ids or [])),
        )
