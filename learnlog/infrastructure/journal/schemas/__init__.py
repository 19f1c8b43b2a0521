from .log_schemas import (
    LogCreateRequest,
    LogDetailResponse,
    LogPatchRequest,
    LogResponse,
    LogSummaryResponse,
)
from .note_schemas import NoteCreateRequest, NoteDetailResponse, NotePatchRequest, NoteResponse
from .theme_schemas import (
    ThemeCreateRequest,
    ThemePatchRequest,
    ThemeResponse,
    ThemeSummaryResponse,
)

__all__ = [
    "LogCreateRequest",
    "LogDetailResponse",
    "LogPatchRequest",
    "LogResponse",
    "LogSummaryResponse",
    "NoteCreateRequest",
    "NoteDetailResponse",
    "NotePatchRequest",
    "NoteResponse",
    "ThemeCreateRequest",
    "ThemePatchRequest",
    "ThemeResponse",
    "ThemeSummaryResponse",
]
