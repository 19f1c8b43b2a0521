"""Structured logging of storage failures, shared by all route handlers."""

from typing import Any

import structlog

from learnlog.config import get_settings

logger = structlog.get_logger(__name__)

# Driver attributes carrying the SQLSTATE or SQLite error name
_DRIVER_CODE_ATTRS = ("sqlstate", "pgcode", "sqlite_errorname")


def _driver_code(error: BaseException) -> str | None:
    orig = getattr(error, "orig", None)
    for attr in _DRIVER_CODE_ATTRS:
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    return None


def log_database_error(endpoint: str, error: BaseException, **context: Any) -> None:  # noqa: ANN401
    """
    Log a storage failure with the endpoint name and caller context.

    Only the error type and the driver error code are recorded. The error's
    message is left out because it embeds the statement parameters, i.e. the
    user's journal text. Context should carry ids, filters and field-presence
    flags only. Tracebacks are attached in development only.

    Args:
        endpoint: Endpoint label, e.g. ``"POST /logs"``
        error: The exception raised by the storage layer
        **context: Additional structured fields
    """
    logger.error(
        "database_error",
        endpoint=endpoint,
        error_type=type(error).__name__,
        driver_code=_driver_code(error),
        exc_info=error if get_settings().ENVIRONMENT == "development" else None,
        **context,
    )
