from .base import CamelModel, RequestModel
from .response_wrappers import CursorPageResponse, ErrorDetail, ErrorResponse, HealthResponse

__all__ = [
    "CamelModel",
    "CursorPageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "RequestModel",
]
