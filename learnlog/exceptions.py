"""Custom exception hierarchy for the learnlog application.

Every error that reaches a client is rendered as
``{"error": {"code": <code>, "message": <message>}}`` where ``code`` is one of
Unauthorized, BadRequest, NotFound, Conflict or InternalServerError.
"""

from uuid import UUID


class LearnlogError(Exception):
    """Base exception for all learnlog errors."""

    code = "InternalServerError"

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class BadRequestError(LearnlogError):
    """Malformed request: bad JSON, failed validation, invalid id/date/cursor."""

    code = "BadRequest"

    def __init__(self, message: str) -> None:
        """Initialize with message and 400 status code."""
        super().__init__(message, status_code=400)


class RequestValidationFailedError(BadRequestError):
    """One or more request fields failed validation."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        """Initialize with the field error map; the first error becomes the message."""
        self.field_errors = dict(field_errors)
        message = next(iter(self.field_errors.values()), "Invalid request")
        super().__init__(message)


class InvalidCursorError(BadRequestError):
    """Pagination cursor could not be decoded."""

    def __init__(self, message: str = "Invalid cursor format") -> None:
        super().__init__(message)


class ReferencedResourceNotFoundError(BadRequestError):
    """A referenced theme or log does not exist for this owner."""


class UnauthorizedError(LearnlogError):
    """No resolved owner identity."""

    code = "Unauthorized"

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, status_code=401)


class NotFoundError(LearnlogError):
    """Resource not found, owned by someone else, or logically deleted."""

    code = "NotFound"

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class ThemeNotFoundError(NotFoundError):
    """Theme not found error."""

    def __init__(self, theme_id: UUID | None = None) -> None:
        self.theme_id = theme_id
        super().__init__("Theme not found")


class LogNotFoundError(NotFoundError):
    """Learning log entry not found error."""

    def __init__(self, log_id: UUID | None = None) -> None:
        self.log_id = log_id
        super().__init__("Log not found")


class NoteNotFoundError(NotFoundError):
    """Meta note not found error."""

    def __init__(self, note_id: UUID | None = None) -> None:
        self.note_id = note_id
        super().__init__("Note not found")


class ConflictError(LearnlogError):
    """Uniqueness violation."""

    code = "Conflict"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409)


class DuplicateLogError(ConflictError):
    """A non-deleted log already exists for this theme on this date."""

    def __init__(self) -> None:
        super().__init__("A log for this theme on this date already exists")


class InternalServerError(LearnlogError):
    """Unclassified failure."""

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        super().__init__(message, status_code=500)


class TenantGuardViolationError(RuntimeError):
    """
    A query on an owned entity was issued without an owner predicate.

    This is a programming error, not a client error: it is never mapped to a
    404 and always surfaces as a 500.
    """

    def __init__(self, entity: str, statement_kind: str) -> None:
        self.entity = entity
        self.statement_kind = statement_kind
        super().__init__(f"SECURITY: {entity} {statement_kind} requires owner_id in where clause")
