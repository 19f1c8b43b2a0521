from .log_repository import LogRepositoryProtocol
from .note_repository import NoteRepositoryProtocol
from .theme_repository import ThemeRepositoryProtocol

__all__ = [
    "LogRepositoryProtocol",
    "NoteRepositoryProtocol",
    "ThemeRepositoryProtocol",
]
