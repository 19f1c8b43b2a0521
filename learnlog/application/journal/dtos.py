"""Data transfer objects for journal use cases."""

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Final

from learnlog.domain.common.value_objects.ids import LogId, ThemeId
from learnlog.domain.journal.entities import (
    LearningLogEntry,
    LogSummary,
    MetaNote,
    MetaNoteCategory,
    ThemeSummary,
)


class _Unset:
    """Marker for a patch field the client did not send."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


class _Patch:
    """
    Partial update: fields left at UNSET are not touched.

    ``None`` is a real value meaning "clear this field".
    """

    def changes(self) -> dict[str, object]:
        """Return the fields that were provided, keyed by attribute name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()


# Filters


@dataclass(frozen=True)
class ThemeListFilters:
    include_completed: bool = False
    include_archived: bool = False


@dataclass(frozen=True)
class LogListFilters:
    theme_id: ThemeId | None = None
    start: date | None = None
    end: date | None = None


@dataclass(frozen=True)
class NoteListFilters:
    category: MetaNoteCategory | None = None
    theme_id: ThemeId | None = None
    start: date | None = None
    end: date | None = None


# Create payloads


@dataclass(frozen=True)
class ThemeCreateData:
    name: str
    goal: str
    short_name: str | None = None
    is_completed: bool = False


@dataclass(frozen=True)
class LogCreateData:
    theme_id: ThemeId
    date: date
    summary: str
    details: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NoteCreateData:
    category: MetaNoteCategory
    body: str
    theme_ids: list[ThemeId] = field(default_factory=list)
    related_log_id: LogId | None = None


# Patches


@dataclass(frozen=True)
class ThemePatch(_Patch):
    name: str | _Unset = UNSET
    goal: str | _Unset = UNSET
    short_name: str | None | _Unset = UNSET
    is_completed: bool | _Unset = UNSET


@dataclass(frozen=True)
class LogPatch(_Patch):
    summary: str | _Unset = UNSET
    details: str | None | _Unset = UNSET
    tags: list[str] | _Unset = UNSET


@dataclass(frozen=True)
class NotePatch(_Patch):
    """Note patch. ``note_date`` is deliberately absent: it never changes."""

    category: MetaNoteCategory | _Unset = UNSET
    body: str | _Unset = UNSET
    related_log_id: LogId | None | _Unset = UNSET
    theme_ids: list[ThemeId] | _Unset = UNSET


# Results


@dataclass(frozen=True)
class ThemeDeletion:
    """Rows logically deleted together with a theme."""

    log_count: int
    note_count: int


# Read models


@dataclass(frozen=True)
class LogDetails:
    """A log with the name of its theme."""

    log: LearningLogEntry
    theme: ThemeSummary


@dataclass(frozen=True)
class NoteDetails:
    """A note with its related log (if visible) and linked themes."""

    note: MetaNote
    related_log: LogSummary | None
    themes: list[ThemeSummary]
