"""
Typed cursors for each journal list.

| List  | Sort key                        | Direction  | Resume predicate |
|-------|---------------------------------|------------|------------------|
| Theme | (created_at, id)                | ascending  | strictly after   |
| Log   | (date, created_at, id)          | descending | strictly before  |
| Note  | (note_date, created_at, id)     | descending | strictly before  |

The id is always the last component so the order is total even when
timestamps collide.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Self
from uuid import UUID

from learnlog.application.common.cursor import decode_cursor, encode_cursor
from learnlog.domain.journal.entities import LearningLogEntry, MetaNote, Theme
from learnlog.exceptions import InvalidCursorError
from learnlog.utils import ensure_utc


def _parse_datetime(raw: str) -> datetime:
    try:
        return ensure_utc(datetime.fromisoformat(raw))
    except ValueError as e:
        raise InvalidCursorError() from e


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise InvalidCursorError() from e


def _parse_uuid(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError as e:
        raise InvalidCursorError() from e


def _format_datetime(value: datetime) -> str:
    return ensure_utc(value).isoformat()


@dataclass(frozen=True)
class ThemeCursor:
    """Sort key of a theme: ``(created_at, id)`` ascending."""

    created_at: datetime
    id: UUID

    @classmethod
    def of(cls, theme: Theme) -> Self:
        assert theme.created_at is not None
        return cls(created_at=theme.created_at, id=theme.id.value)

    def encode(self) -> str:
        return encode_cursor({"createdAt": _format_datetime(self.created_at), "id": str(self.id)})

    @classmethod
    def decode(cls, raw: str) -> Self:
        fields = decode_cursor(raw, ("createdAt", "id"))
        return cls(created_at=_parse_datetime(fields["createdAt"]), id=_parse_uuid(fields["id"]))


@dataclass(frozen=True)
class LogCursor:
    """Sort key of a log: ``(date, created_at, id)`` descending."""

    date: date
    created_at: datetime
    id: UUID

    @classmethod
    def of(cls, log: LearningLogEntry) -> Self:
        assert log.created_at is not None
        return cls(date=log.date, created_at=log.created_at, id=log.id.value)

    def encode(self) -> str:
        return encode_cursor(
            {
                "date": self.date.isoformat(),
                "createdAt": _format_datetime(self.created_at),
                "id": str(self.id),
            }
        )

    @classmethod
    def decode(cls, raw: str) -> Self:
        fields = decode_cursor(raw, ("date", "createdAt", "id"))
        return cls(
            date=_parse_date(fields["date"]),
            created_at=_parse_datetime(fields["createdAt"]),
            id=_parse_uuid(fields["id"]),
        )


@dataclass(frozen=True)
class NoteCursor:
    """Sort key of a note: ``(note_date, created_at, id)`` descending."""

    note_date: date
    created_at: datetime
    id: UUID

    @classmethod
    def of(cls, note: MetaNote) -> Self:
        assert note.created_at is not None
        return cls(note_date=note.note_date, created_at=note.created_at, id=note.id.value)

    def encode(self) -> str:
        return encode_cursor(
            {
                "noteDate": self.note_date.isoformat(),
                "createdAt": _format_datetime(self.created_at),
                "id": str(self.id),
            }
        )

    @classmethod
    def decode(cls, raw: str) -> Self:
        fields = decode_cursor(raw, ("noteDate", "createdAt", "id"))
        return cls(
            note_date=_parse_date(fields["noteDate"]),
            created_at=_parse_datetime(fields["createdAt"]),
            id=_parse_uuid(fields["id"]),
        )
