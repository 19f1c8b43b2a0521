from .log_repository import LogRepository
from .note_repository import NoteRepository
from .theme_repository import ThemeRepository

__all__ = ["LogRepository", "NoteRepository", "ThemeRepository"]
