"""
Strict field types for journal request bodies.

Every type checks the raw JSON value itself (no coercion) and fails with a
client-facing message naming the camelCase field.
"""

import re
from datetime import date
from typing import Annotated, Any
from uuid import UUID

from pydantic import BeforeValidator, ValidationInfo
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from learnlog.domain.journal.entities import MetaNoteCategory

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

CATEGORY_MESSAGE = "category must be one of: " + ", ".join(c.value for c in MetaNoteCategory)


def _field(info: ValidationInfo) -> str:
    return to_camel(info.field_name or "value")


def _fail(error_type: str, message: str, info: ValidationInfo) -> PydanticCustomError:
    return PydanticCustomError(error_type, message, {"field": _field(info)})


def parse_uuid(value: str) -> UUID | None:
    """Parse an ``8-4-4-4-12`` hex UUID; None if the format does not match."""
    if not UUID_PATTERN.match(value):
        return None
    return UUID(value)


def parse_date(value: str) -> date | None:
    """
    Parse a strict ``YYYY-MM-DD`` calendar date.

    Raises:
        ValueError: If the format matches but the date does not exist
    """
    if not DATE_PATTERN.match(value):
        return None
    return date.fromisoformat(value)


def _required_text(value: Any, info: ValidationInfo) -> str:  # noqa: ANN401
    if not isinstance(value, str) or not value.strip():
        raise _fail("required_text", "{field} is required and must be a non-empty string", info)
    return value


def _non_empty_text(value: Any, info: ValidationInfo) -> str:  # noqa: ANN401
    if not isinstance(value, str) or not value.strip():
        raise _fail("non_empty_text", "{field} must be a non-empty string", info)
    return value


def _optional_text(value: Any, info: ValidationInfo) -> str | None:  # noqa: ANN401
    if value is None:
        return None
    if not isinstance(value, str):
        raise _fail("optional_text", "{field} must be a string or null", info)
    return value if value.strip() else None


def _strict_bool(value: Any, info: ValidationInfo) -> bool:  # noqa: ANN401
    if not isinstance(value, bool):
        raise _fail("strict_bool", "{field} must be a boolean", info)
    return value


def _string_list(value: Any, info: ValidationInfo) -> list[str]:  # noqa: ANN401
    if not isinstance(value, list):
        raise _fail("string_list", "{field} must be an array", info)
    if not all(isinstance(item, str) for item in value):
        raise _fail("string_list_items", "{field} must be an array of strings", info)
    return value


def _required_uuid(value: Any, info: ValidationInfo) -> UUID:  # noqa: ANN401
    if not isinstance(value, str) or not value:
        raise _fail("required_uuid", "{field} is required and must be a string", info)
    parsed = parse_uuid(value)
    if parsed is None:
        raise _fail("uuid_format", "{field} must be a valid UUID", info)
    return parsed


def _optional_uuid(value: Any, info: ValidationInfo) -> UUID | None:  # noqa: ANN401
    if value is None:
        return None
    if not isinstance(value, str):
        raise _fail("optional_uuid", "{field} must be a string or null", info)
    parsed = parse_uuid(value)
    if parsed is None:
        raise _fail("uuid_format", "{field} must be a valid UUID", info)
    return parsed


def _uuid_list(value: Any, info: ValidationInfo) -> list[UUID]:  # noqa: ANN401
    if not isinstance(value, list):
        raise _fail("uuid_list", "{field} must be an array", info)
    parsed: list[UUID] = []
    for item in value:
        item_uuid = parse_uuid(item) if isinstance(item, str) else None
        if item_uuid is None:
            raise _fail("uuid_list_items", "{field} must be an array of valid UUIDs", info)
        parsed.append(item_uuid)
    # Duplicates collapse, first occurrence wins
    return list(dict.fromkeys(parsed))


def _calendar_date(value: Any, info: ValidationInfo) -> date:  # noqa: ANN401
    if not isinstance(value, str) or not value:
        raise _fail("required_date", "{field} is required and must be a string", info)
    try:
        parsed = parse_date(value)
    except ValueError:
        raise _fail("date_value", "{field} must be a valid date", info) from None
    if parsed is None:
        raise _fail("date_format", "{field} must be in YYYY-MM-DD format", info)
    return parsed


def _category(value: Any, info: ValidationInfo) -> MetaNoteCategory:  # noqa: ANN401
    if not isinstance(value, str) or value not in MetaNoteCategory.__members__:
        raise PydanticCustomError("category", CATEGORY_MESSAGE)
    return MetaNoteCategory(value)


RequiredText = Annotated[str, BeforeValidator(_required_text)]
OptionalText = Annotated[str | None, BeforeValidator(_optional_text)]
StrictFlag = Annotated[bool, BeforeValidator(_strict_bool)]
StringList = Annotated[list[str], BeforeValidator(_string_list)]
RequiredUuid = Annotated[UUID, BeforeValidator(_required_uuid)]
OptionalUuid = Annotated[UUID | None, BeforeValidator(_optional_uuid)]
UuidList = Annotated[list[UUID], BeforeValidator(_uuid_list)]
CalendarDate = Annotated[date, BeforeValidator(_calendar_date)]
Category = Annotated[MetaNoteCategory, BeforeValidator(_category)]

# Patch variants: None only stands for "omitted", an explicit null is rejected
PatchText = Annotated[str | None, BeforeValidator(_non_empty_text)]
PatchFlag = Annotated[bool | None, BeforeValidator(_strict_bool)]
PatchStringList = Annotated[list[str] | None, BeforeValidator(_string_list)]
PatchUuidList = Annotated[list[UUID] | None, BeforeValidator(_uuid_list)]
PatchCategory = Annotated[MetaNoteCategory | None, BeforeValidator(_category)]
