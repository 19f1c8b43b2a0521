from .log_mapper import LogMapper
from .note_mapper import NoteMapper
from .theme_mapper import ThemeMapper

__all__ = ["LogMapper", "NoteMapper", "ThemeMapper"]
