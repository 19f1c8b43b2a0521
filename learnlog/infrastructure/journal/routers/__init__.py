from .logs import router as logs_router
from .notes import router as notes_router
from .themes import router as themes_router

__all__ = ["logs_router", "notes_router", "themes_router"]
