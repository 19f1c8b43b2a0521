from .learning_log_entry import LearningLogEntry, LogSummary
from .meta_note import MetaNote, MetaNoteCategory
from .theme import Theme, ThemeSummary

__all__ = [
    "LearningLogEntry",
    "LogSummary",
    "MetaNote",
    "MetaNoteCategory",
    "Theme",
    "ThemeSummary",
]
