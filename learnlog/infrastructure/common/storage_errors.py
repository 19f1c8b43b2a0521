"""
Classification of storage failures into client-facing errors.

Integrity errors are told apart by the DB-API driver's error code, never by
the message text:

| Backend    | Unique violation        | Foreign key violation |
|------------|-------------------------|-----------------------|
| PostgreSQL | SQLSTATE 23505          | SQLSTATE 23503        |
| SQLite     | extended code 2067/1555 | extended code 787     |
"""

from enum import Enum
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from learnlog.exceptions import (
    ConflictError,
    InternalServerError,
    LearnlogError,
    ReferencedResourceNotFoundError,
)


class IntegrityViolation(Enum):
    """Kind of integrity constraint a statement violated."""

    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    OTHER = "other"


_PG_UNIQUE_VIOLATION = "23505"
_PG_FOREIGN_KEY_VIOLATION = "23503"

# SQLITE_CONSTRAINT_UNIQUE, SQLITE_CONSTRAINT_PRIMARYKEY, SQLITE_CONSTRAINT_FOREIGNKEY
_SQLITE_UNIQUE_CODES = frozenset({2067, 1555})
_SQLITE_FOREIGN_KEY_CODES = frozenset({787})
_SQLITE_UNIQUE_NAMES = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})
_SQLITE_FOREIGN_KEY_NAMES = frozenset({"SQLITE_CONSTRAINT_FOREIGNKEY"})


def _sqlstate(orig: Any) -> str | None:  # noqa: ANN401
    # psycopg 3 exposes ``sqlstate``, psycopg2 ``pgcode``
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return code if isinstance(code, str) else None


def classify_integrity_error(error: IntegrityError) -> IntegrityViolation:
    """Tell which kind of constraint an IntegrityError comes from."""
    orig = error.orig

    sqlstate = _sqlstate(orig)
    if sqlstate == _PG_UNIQUE_VIOLATION:
        return IntegrityViolation.UNIQUE
    if sqlstate == _PG_FOREIGN_KEY_VIOLATION:
        return IntegrityViolation.FOREIGN_KEY

    sqlite_code = getattr(orig, "sqlite_errorcode", None)
    sqlite_name = getattr(orig, "sqlite_errorname", None)
    if sqlite_code in _SQLITE_UNIQUE_CODES or sqlite_name in _SQLITE_UNIQUE_NAMES:
        return IntegrityViolation.UNIQUE
    if sqlite_code in _SQLITE_FOREIGN_KEY_CODES or sqlite_name in _SQLITE_FOREIGN_KEY_NAMES:
        return IntegrityViolation.FOREIGN_KEY

    return IntegrityViolation.OTHER


def translate_storage_error(
    error: SQLAlchemyError,
    *,
    fallback_message: str,
    conflict: LearnlogError | None = None,
    reference_message: str | None = None,
) -> LearnlogError:
    """
    Map a storage failure to the error rendered to the client.

    Args:
        error: The SQLAlchemy failure
        fallback_message: Message of the 500 returned for anything unclassified
        conflict: Error to return for a unique violation (409)
        reference_message: Message of the 400 returned for a foreign key
            violation

    Returns:
        The application error to raise
    """
    if isinstance(error, IntegrityError):
        violation = classify_integrity_error(error)
        if violation is IntegrityViolation.UNIQUE and conflict is not None:
            return conflict
        if violation is IntegrityViolation.UNIQUE:
            return ConflictError("Resource already exists")
        if violation is IntegrityViolation.FOREIGN_KEY and reference_message is not None:
            return ReferencedResourceNotFoundError(reference_message)
    return InternalServerError(fallback_message)
