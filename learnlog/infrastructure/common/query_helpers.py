"""Small SQLAlchemy expression helpers shared by the journal repositories."""

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import and_, or_
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from learnlog.domain.common.entity import EntityId


def _keyset(
    columns: Sequence[InstrumentedAttribute[Any]],
    values: Sequence[Any],
    *,
    descending: bool,
) -> ColumnElement[bool]:
    # (a, b, c) < (x, y, z)  ==  a < x OR (a = x AND (b < y OR (b = y AND c < z)))
    column, *rest_columns = columns
    value, *rest_values = values
    strict = column < value if descending else column > value
    if not rest_columns:
        return strict
    return or_(
        strict,
        and_(column == value, _keyset(rest_columns, rest_values, descending=descending)),
    )


def keyset_after(
    columns: Sequence[InstrumentedAttribute[Any]], values: Sequence[Any]
) -> ColumnElement[bool]:
    """Rows strictly after ``values`` in ascending ``columns`` order."""
    return _keyset(columns, values, descending=False)


def keyset_before(
    columns: Sequence[InstrumentedAttribute[Any]], values: Sequence[Any]
) -> ColumnElement[bool]:
    """Rows strictly after ``values`` in descending ``columns`` order."""
    return _keyset(columns, values, descending=True)


def column_values(changes: Mapping[str, object]) -> dict[str, object]:
    """Unwrap typed identifiers so a patch can be passed to ``update().values()``."""
    return {
        name: value.value if isinstance(value, EntityId) else value
        for name, value in changes.items()
    }
