"""
Owner scoping for every ORM statement on journal entities.

The guard is a ``do_orm_execute`` listener installed on the session factory.
For SELECT and ORM-enabled UPDATE/DELETE statements whose top-level entities
include a Theme, LearningLogEntry or MetaNote it:

1. raises TenantGuardViolationError when the WHERE clause has no
   ``owner_id == ...`` predicate for that entity;
2. on SELECT, appends ``state != 'DELETED'`` unless the statement already
   constrains that entity's ``state`` column.

Relationship loads and attribute refreshes are skipped: their parent row was
already loaded through a guarded statement. Test fixtures that need raw access
pass ``execution_options(bypass_tenant_guard=True)``.
"""

from typing import Any

import structlog
from sqlalchemy import Table, event
from sqlalchemy.orm import ORMExecuteState, Session, sessionmaker
from sqlalchemy.sql import operators, visitors
from sqlalchemy.sql.elements import BinaryExpression, ColumnElement
from sqlalchemy.sql.schema import Column

from learnlog.domain.common.resource_state import ResourceState
from learnlog.exceptions import TenantGuardViolationError
from learnlog.models import LearningLogEntry, MetaNote, Theme

logger = structlog.get_logger(__name__)

BYPASS_TENANT_GUARD = "bypass_tenant_guard"

_OWNER_COLUMN = "owner_id"
_STATE_COLUMN = "state"

_GUARDED_TABLES: frozenset[Any] = frozenset(
    model.__table__ for model in (Theme, LearningLogEntry, MetaNote)
)


def _is_table_column(element: Any, table: Table, name: str) -> bool:  # noqa: ANN401
    return isinstance(element, Column) and element.table is table and element.name == name


def references_column(
    clause: ColumnElement[Any] | None, table: Table, name: str, *, equality_only: bool
) -> bool:
    """
    Check whether ``clause`` compares ``table.<name>`` with something.

    With ``equality_only`` only ``==`` comparisons count.
    """
    if clause is None:
        return False
    for element in visitors.iterate(clause):
        if not isinstance(element, BinaryExpression):
            continue
        if equality_only and element.operator is not operators.eq:
            continue
        if _is_table_column(element.left, table, name) or _is_table_column(
            element.right, table, name
        ):
            return True
    return False


def _statement_kind(orm_execute_state: ORMExecuteState) -> str | None:
    if orm_execute_state.is_select:
        return "select"
    if orm_execute_state.is_update:
        return "update"
    if orm_execute_state.is_delete:
        return "delete"
    return None


def _guard_statement(orm_execute_state: ORMExecuteState) -> None:
    if orm_execute_state.execution_options.get(BYPASS_TENANT_GUARD):
        return
    if orm_execute_state.is_column_load or orm_execute_state.is_relationship_load:
        return

    kind = _statement_kind(orm_execute_state)
    if kind is None:
        return

    statement = orm_execute_state.statement
    rewritten = False
    for mapper in orm_execute_state.all_mappers:
        table = mapper.local_table
        if table not in _GUARDED_TABLES:
            continue

        where = statement.whereclause  # type: ignore[attr-defined]
        if not references_column(where, table, _OWNER_COLUMN, equality_only=True):
            logger.error(
                "tenant_guard_violation",
                entity=mapper.class_.__name__,
                statement_kind=kind,
            )
            raise TenantGuardViolationError(mapper.class_.__name__, kind)

        if kind == "select" and not references_column(
            where, table, _STATE_COLUMN, equality_only=False
        ):
            statement = statement.where(  # type: ignore[attr-defined]
                table.c[_STATE_COLUMN] != ResourceState.DELETED
            )
            rewritten = True

    if rewritten:
        orm_execute_state.statement = statement


def install_tenant_guard(session_factory: sessionmaker[Session]) -> None:
    """Attach the guard to every session produced by ``session_factory``."""
    if not event.contains(session_factory, "do_orm_execute", _guard_statement):
        event.listen(session_factory, "do_orm_execute", _guard_statement)
