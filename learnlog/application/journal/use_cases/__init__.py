from .log_use_case import LogUseCase
from .note_use_case import NoteUseCase
from .theme_use_case import ThemeUseCase

__all__ = ["LogUseCase", "NoteUseCase", "ThemeUseCase"]
