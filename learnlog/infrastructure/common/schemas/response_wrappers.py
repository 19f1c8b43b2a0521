"""Common response wrapper schemas for API responses."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from learnlog.infrastructure.common.schemas.base import CamelModel

T = TypeVar("T")


class CursorPageResponse(CamelModel, Generic[T]):
    """One page of a cursor-paginated list."""

    items: list[T]
    next_cursor: str | None


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope: ``{"error": {"code": ..., "message": ...}}``."""

    error: ErrorDetail

    @classmethod
    def of(cls, code: str, message: str) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=code, message=message))


class HealthResponse(BaseModel):
    status: str
