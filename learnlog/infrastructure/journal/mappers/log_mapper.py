"""Mapper for LearningLogEntry ORM ↔ Domain conversion."""

from learnlog.domain.common.value_objects.ids import LogId, OwnerId, ThemeId
from learnlog.domain.journal.entities import LearningLogEntry
from learnlog.models import LearningLogEntry as LearningLogEntryORM
from learnlog.utils import ensure_utc


class LogMapper:
    """Mapper for LearningLogEntry ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: LearningLogEntryORM) -> LearningLogEntry:
        """Convert ORM model to domain entity."""
        return LearningLogEntry(
            id=LogId(orm_model.id),
            owner_id=OwnerId(orm_model.owner_id),
            theme_id=ThemeId(orm_model.theme_id),
            date=orm_model.date,
            summary=orm_model.summary,
            details=orm_model.details,
            tags=list(orm_model.tags or []),
            state=orm_model.state,
            state_changed_at=ensure_utc(orm_model.state_changed_at),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: LearningLogEntry) -> LearningLogEntryORM:
        """Convert a new domain entity to an ORM model."""
        return LearningLogEntryORM(
            id=domain_entity.id.value,
            owner_id=domain_entity.owner_id.value,
            theme_id=domain_entity.theme_id.value,
            date=domain_entity.date,
            summary=domain_entity.summary,
            details=domain_entity.details,
            tags=list(domain_entity.tags),
            state=domain_entity.state,
        )
