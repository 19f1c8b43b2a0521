"""Mapper for MetaNote ORM ↔ Domain conversion."""

from datetime import datetime, timedelta

from learnlog.domain.common.value_objects.ids import LogId, NoteId, OwnerId, ThemeId
from learnlog.domain.journal.entities import MetaNote
from learnlog.models import MetaNote as MetaNoteORM
from learnlog.models import MetaNoteTheme as MetaNoteThemeORM
from learnlog.utils import ensure_utc


class NoteMapper:
    """Mapper for MetaNote ORM ↔ Domain conversion, theme links included."""

    def to_domain(self, orm_model: MetaNoteORM) -> MetaNote:
        """Convert ORM model to domain entity."""
        return MetaNote(
            id=NoteId(orm_model.id),
            owner_id=OwnerId(orm_model.owner_id),
            category=orm_model.category,
            body=orm_model.body,
            note_date=orm_model.note_date,
            related_log_id=(
                LogId(orm_model.related_log_id) if orm_model.related_log_id is not None else None
            ),
            theme_ids=[ThemeId(link.theme_id) for link in orm_model.theme_links],
            state=orm_model.state,
            state_changed_at=ensure_utc(orm_model.state_changed_at),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: MetaNote) -> MetaNoteORM:
        """Convert a new domain entity to an ORM model."""
        return MetaNoteORM(
            id=domain_entity.id.value,
            owner_id=domain_entity.owner_id.value,
            category=domain_entity.category,
            body=domain_entity.body,
            note_date=domain_entity.note_date,
            related_log_id=(
                domain_entity.related_log_id.value
                if domain_entity.related_log_id is not None
                else None
            ),
            state=domain_entity.state,
        )

    def to_link_orms(self, domain_entity: MetaNote, now: datetime) -> list[MetaNoteThemeORM]:
        """Build the join rows linking a new note to its themes."""
        return self.link_orms(domain_entity.id, domain_entity.theme_ids, now)

    def link_orms(
        self, note_id: NoteId, theme_ids: list[ThemeId], now: datetime
    ) -> list[MetaNoteThemeORM]:
        """
        Build join rows for ``theme_ids`` in the given order.

        Link timestamps are staggered by a microsecond so that reading the
        links back by ``created_at`` preserves that order.
        """
        return [
            MetaNoteThemeORM(
                meta_note_id=note_id.value,
                theme_id=theme_id.value,
                created_at=now + timedelta(microseconds=index),
            )
            for index, theme_id in enumerate(dict.fromkeys(theme_ids))
        ]
