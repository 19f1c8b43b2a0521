"""Common value objects shared across all domain modules."""

from .ids import LogId, NoteId, OwnerId, ThemeId, new_resource_id

__all__ = [
    "LogId",
    "NoteId",
    "OwnerId",
    "ThemeId",
    "new_resource_id",
]
