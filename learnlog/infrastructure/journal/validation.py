"""
Request validation for the journal API.

Each ``validate_*`` function is pure: it takes the raw decoded JSON body (or
a raw query/path value) and returns a ValidationResult holding either the
application-level payload or a ``{field: message}`` map. Nothing here touches
storage.

Example:
    result = validate_theme_create(body)
    data = result.unwrap()  # raises RequestValidationFailedError (400)
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from learnlog.application.journal.dtos import (
    UNSET,
    LogCreateData,
    LogPatch,
    NoteCreateData,
    NotePatch,
    ThemeCreateData,
    ThemePatch,
)
from learnlog.config import get_settings
from learnlog.domain.common.value_objects.ids import LogId, ThemeId
from learnlog.domain.journal.entities import MetaNoteCategory
from learnlog.exceptions import RequestValidationFailedError
from learnlog.infrastructure.journal.schemas import (
    LogCreateRequest,
    LogPatchRequest,
    NoteCreateRequest,
    NotePatchRequest,
    ThemeCreateRequest,
    ThemePatchRequest,
)
from learnlog.infrastructure.journal.schemas.field_types import (
    CATEGORY_MESSAGE,
    parse_date,
    parse_uuid,
)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

BODY_FIELD = "body"
NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"
EMPTY_PATCH_MESSAGE = "At least one field must be provided"

# Messages for required fields that are absent from the body
_MISSING_MESSAGES = {
    "name": "name is required and must be a non-empty string",
    "goal": "goal is required and must be a non-empty string",
    "themeId": "themeId is required and must be a string",
    "date": "date is required and must be a string",
    "summary": "summary is required and must be a non-empty string",
    "category": CATEGORY_MESSAGE,
    "body": "body is required and must be a non-empty string",
}


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of validating one request input."""

    data: T | None = None
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.field_errors

    @property
    def first_error(self) -> str | None:
        return next(iter(self.field_errors.values()), None)

    def unwrap(self) -> T:
        """
        Return the validated data.

        Raises:
            RequestValidationFailedError: If validation failed
        """
        if self.field_errors:
            raise RequestValidationFailedError(self.field_errors)
        assert self.data is not None
        return self.data

    @classmethod
    def failure(cls, field_name: str, message: str) -> "ValidationResult[T]":
        return cls(field_errors={field_name: message})


def _field_errors(error: PydanticValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for item in error.errors():
        name = str(item["loc"][0]) if item["loc"] else BODY_FIELD
        if item["type"] == "missing":
            message = _MISSING_MESSAGES.get(name, f"{name} is required")
        else:
            message = item["msg"]
        errors.setdefault(name, message)
    return errors


def _parse_body(model: type[M], body: Any) -> tuple[M | None, dict[str, str]]:  # noqa: ANN401
    if not isinstance(body, dict):
        return None, {BODY_FIELD: NOT_AN_OBJECT_MESSAGE}
    try:
        return model.model_validate(body), {}
    except PydanticValidationError as e:
        return None, _field_errors(e)


def _provided(request: BaseModel, name: str) -> bool:
    return name in request.model_fields_set


# Theme


def validate_theme_create(body: Any) -> ValidationResult[ThemeCreateData]:  # noqa: ANN401
    request, errors = _parse_body(ThemeCreateRequest, body)
    if request is None:
        return ValidationResult(field_errors=errors)
    return ValidationResult(
        data=ThemeCreateData(
            name=request.name,
            goal=request.goal,
            short_name=request.short_name,
            is_completed=request.is_completed,
        )
    )


def validate_theme_patch(body: Any) -> ValidationResult[ThemePatch]:  # noqa: ANN401
    """
    Validate a theme patch.

    Omitted fields stay untouched; ``shortName: null`` or a blank short name
    clears it. An empty patch is rejected.
    """
    request, errors = _parse_body(ThemePatchRequest, body)
    if request is None:
        return ValidationResult(field_errors=errors)

    patch = ThemePatch(
        name=request.name if _provided(request, "name") else UNSET,  # type: ignore[arg-type]
        goal=request.goal if _provided(request, "goal") else UNSET,  # type: ignore[arg-type]
        short_name=request.short_name if _provided(request, "short_name") else UNSET,
        is_completed=(
            request.is_completed  # type: ignore[arg-type]
            if _provided(request, "is_completed")
            else UNSET
        ),
    )
    if patch.is_empty():
        return ValidationResult.failure(BODY_FIELD, EMPTY_PATCH_MESSAGE)
    return ValidationResult(data=patch)


# Log


def validate_log_create(body: Any) -> ValidationResult[LogCreateData]:  # noqa: ANN401
    request, errors = _parse_body(LogCreateRequest, body)
    if request is None:
        return ValidationResult(field_errors=errors)
    return ValidationResult(
        data=LogCreateData(
            theme_id=ThemeId(request.theme_id),
            date=request.date,
            summary=request.summary,
            details=request.details,
            tags=list(request.tags),
        )
    )


def validate_log_patch(body: Any) -> ValidationResult[LogPatch]:  # noqa: ANN401
    request, errors = _parse_body(LogPatchRequest, body)
    if request is None:
        return ValidationResult(field_errors=errors)

    patch = LogPatch(
        summary=request.summary if _provided(request, "summary") else UNSET,  # type: ignore[arg-type]
        details=request.details if _provided(request, "details") else UNSET,
        tags=request.tags if _provided(request, "tags") else UNSET,  # type: ignore[arg-type]
    )
    if patch.is_empty():
        return ValidationResult.failure(BODY_FIELD, EMPTY_PATCH_MESSAGE)
    return ValidationResult(data=patch)


# Note


def validate_note_create(body: Any) -> ValidationResult[NoteCreateData]:  # noqa: ANN401
    request, errors = _parse_body(NoteCreateRequest, body)
    if request is None:
        return ValidationResult(field_errors=errors)
    return ValidationResult(
        data=NoteCreateData(
            category=request.category,
            body=request.body,
            theme_ids=[ThemeId(theme_id) for theme_id in request.theme_ids],
            related_log_id=LogId(request.related_log_id) if request.related_log_id else None,
        )
    )


def validate_note_patch(body: Any) -> ValidationResult[NotePatch]:  # noqa: ANN401
    """
    Validate a note patch.

    ``themeIds`` replaces the whole link set; ``relatedLogId: null`` unlinks
    the log. ``noteDate`` is not patchable and is ignored like any unknown key.
    """
    request, errors = _parse_body(NotePatchRequest, body)
    if request is None:
        return ValidationResult(field_errors=errors)

    related_log_id: LogId | None | object = UNSET
    if _provided(request, "related_log_id"):
        related_log_id = LogId(request.related_log_id) if request.related_log_id else None

    patch = NotePatch(
        category=request.category if _provided(request, "category") else UNSET,  # type: ignore[arg-type]
        body=request.body if _provided(request, "body") else UNSET,  # type: ignore[arg-type]
        theme_ids=(
            [ThemeId(theme_id) for theme_id in request.theme_ids or []]
            if _provided(request, "theme_ids")
            else UNSET
        ),
        related_log_id=related_log_id,  # type: ignore[arg-type]
    )
    if patch.is_empty():
        return ValidationResult.failure(BODY_FIELD, EMPTY_PATCH_MESSAGE)
    return ValidationResult(data=patch)


# Query and path parameters


def validate_limit(
    raw: str | None, default: int | None = None, maximum: int | None = None
) -> ValidationResult[int]:
    """
    Validate the ``limit`` query parameter; absent means ``default``.

    Bounds default to ``DEFAULT_PAGE_LIMIT`` and ``MAX_PAGE_LIMIT`` from settings.
    """
    settings = get_settings()
    default = default if default is not None else settings.DEFAULT_PAGE_LIMIT
    maximum = maximum if maximum is not None else settings.MAX_PAGE_LIMIT
    message = f"limit must be between 1 and {maximum}"
    if raw is None or raw == "":
        return ValidationResult(data=default)
    try:
        limit = int(raw)
    except ValueError:
        return ValidationResult.failure("limit", message)
    if not 1 <= limit <= maximum:
        return ValidationResult.failure("limit", message)
    return ValidationResult(data=limit)


def validate_uuid_param(raw: str | None, name: str = "id") -> ValidationResult[UUID]:
    if not raw:
        return ValidationResult.failure(name, f"{name} is required")
    parsed = parse_uuid(raw)
    if parsed is None:
        return ValidationResult.failure(name, f"{name} must be a valid UUID")
    return ValidationResult(data=parsed)


def validate_date_param(raw: str | None, name: str = "date") -> ValidationResult[date]:
    if not raw:
        return ValidationResult.failure(name, f"{name} is required")
    try:
        parsed = parse_date(raw)
    except ValueError:
        return ValidationResult.failure(name, f"{name} must be a valid date")
    if parsed is None:
        return ValidationResult.failure(name, f"{name} must be in YYYY-MM-DD format")
    return ValidationResult(data=parsed)


def validate_category_param(raw: str | None) -> ValidationResult[MetaNoteCategory]:
    if raw is None or raw not in MetaNoteCategory.__members__:
        return ValidationResult.failure("category", CATEGORY_MESSAGE)
    return ValidationResult(data=MetaNoteCategory(raw))


def parse_flag(raw: str | None) -> bool:
    """Boolean query flag: only the literal ``"true"`` is true."""
    return raw == "true"
