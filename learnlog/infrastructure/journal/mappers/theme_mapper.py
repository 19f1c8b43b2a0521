"""Mapper for Theme ORM ↔ Domain conversion."""

from learnlog.domain.common.value_objects.ids import OwnerId, ThemeId
from learnlog.domain.journal.entities import Theme
from learnlog.models import Theme as ThemeORM
from learnlog.utils import ensure_utc


class ThemeMapper:
    """Mapper for Theme ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: ThemeORM) -> Theme:
        """Convert ORM model to domain entity."""
        return Theme(
            id=ThemeId(orm_model.id),
            owner_id=OwnerId(orm_model.owner_id),
            name=orm_model.name,
            goal=orm_model.goal,
            short_name=orm_model.short_name,
            is_completed=orm_model.is_completed,
            state=orm_model.state,
            state_changed_at=ensure_utc(orm_model.state_changed_at),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Theme) -> ThemeORM:
        """Convert a new domain entity to an ORM model; timestamps come from column defaults."""
        return ThemeORM(
            id=domain_entity.id.value,
            owner_id=domain_entity.owner_id.value,
            name=domain_entity.name,
            goal=domain_entity.goal,
            short_name=domain_entity.short_name,
            is_completed=domain_entity.is_completed,
            state=domain_entity.state,
        )
