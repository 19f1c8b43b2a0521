"""Repository for LearningLogEntry domain entities."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnlog.application.common.pagination import PageRequest
from learnlog.application.journal.cursors import LogCursor
from learnlog.application.journal.dtos import LogListFilters
from learnlog.domain.common.resource_state import (
    ResourceState,
    source_states,
    state_change_values,
)
from learnlog.domain.common.value_objects.ids import LogId, OwnerId, ThemeId
from learnlog.domain.journal.entities import LearningLogEntry, LogSummary
from learnlog.infrastructure.common.query_helpers import column_values, keyset_before
from learnlog.infrastructure.journal.mappers.log_mapper import LogMapper
from learnlog.models import LearningLogEntry as LearningLogEntryORM
from learnlog.utils import utcnow


class LogRepository:
    """Repository for LearningLogEntry domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = LogMapper()

    def find_page(
        self, owner_id: OwnerId, filters: LogListFilters, page: PageRequest[LogCursor]
    ) -> list[LearningLogEntry]:
        """
        Fetch one page of logs plus one look-ahead row.

        Ordered by ``(date, created_at, id)`` descending. ``start`` and ``end``
        bound ``date`` inclusively.
        """
        stmt = select(LearningLogEntryORM).where(LearningLogEntryORM.owner_id == owner_id.value)
        if filters.theme_id is not None:
            stmt = stmt.where(LearningLogEntryORM.theme_id == filters.theme_id.value)
        if filters.start is not None:
            stmt = stmt.where(LearningLogEntryORM.date >= filters.start)
        if filters.end is not None:
            stmt = stmt.where(LearningLogEntryORM.date <= filters.end)
        if page.cursor is not None:
            stmt = stmt.where(
                keyset_before(
                    (
                        LearningLogEntryORM.date,
                        LearningLogEntryORM.created_at,
                        LearningLogEntryORM.id,
                    ),
                    (page.cursor.date, page.cursor.created_at, page.cursor.id),
                )
            )
        stmt = stmt.order_by(
            LearningLogEntryORM.date.desc(),
            LearningLogEntryORM.created_at.desc(),
            LearningLogEntryORM.id.desc(),
        ).limit(page.fetch_size)

        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_id(self, log_id: LogId, owner_id: OwnerId) -> LearningLogEntry | None:
        """Find a non-deleted log by ID with ownership check."""
        stmt = (
            select(LearningLogEntryORM)
            .where(
                LearningLogEntryORM.id == log_id.value,
                LearningLogEntryORM.owner_id == owner_id.value,
            )
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_summary(self, log_id: LogId, owner_id: OwnerId) -> LogSummary | None:
        """Get the short projection of a non-deleted log, if visible to the owner."""
        stmt = select(
            LearningLogEntryORM.id,
            LearningLogEntryORM.theme_id,
            LearningLogEntryORM.date,
            LearningLogEntryORM.summary,
        ).where(
            LearningLogEntryORM.id == log_id.value,
            LearningLogEntryORM.owner_id == owner_id.value,
        )
        row = self.db.execute(stmt).one_or_none()
        if row is None:
            return None
        return LogSummary(
            id=LogId(row.id), theme_id=ThemeId(row.theme_id), date=row.date, summary=row.summary
        )

    def save(self, log: LearningLogEntry) -> LearningLogEntry:
        """
        Insert a new log.

        Raises:
            IntegrityError: If a live log already exists for the theme and date,
                or the theme does not belong to the owner
        """
        orm_model = self.mapper.to_orm(log)
        try:
            self.db.add(orm_model)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def update(
        self, log_id: LogId, owner_id: OwnerId, changes: dict[str, object]
    ) -> LearningLogEntry | None:
        """Apply a partial update to a non-deleted log; None if nothing matched."""
        stmt = (
            update(LearningLogEntryORM)
            .where(
                LearningLogEntryORM.id == log_id.value,
                LearningLogEntryORM.owner_id == owner_id.value,
                LearningLogEntryORM.state != ResourceState.DELETED,
            )
            .values(**column_values(changes), updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            if result.rowcount == 0:  # type: ignore[attr-defined]
                self.db.rollback()
                return None
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return self.find_by_id(log_id, owner_id)

    def soft_delete(self, log_id: LogId, owner_id: OwnerId, now: datetime) -> bool:
        """Logically delete a log. Returns False if no live log matched."""
        stmt = (
            update(LearningLogEntryORM)
            .where(
                LearningLogEntryORM.id == log_id.value,
                LearningLogEntryORM.owner_id == owner_id.value,
                LearningLogEntryORM.state.in_(source_states(ResourceState.DELETED)),
            )
            .values(**state_change_values(ResourceState.DELETED, now))
            .execution_options(synchronize_session=False)
        )
        try:
            deleted = self.db.execute(stmt).rowcount > 0  # type: ignore[attr-defined]
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return deleted
