"""Repository for MetaNote domain entities and their theme links."""

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnlog.application.common.pagination import PageRequest
from learnlog.application.journal.cursors import NoteCursor
from learnlog.application.journal.dtos import NoteListFilters
from learnlog.domain.common.resource_state import (
    ResourceState,
    source_states,
    state_change_values,
)
from learnlog.domain.common.value_objects.ids import NoteId, OwnerId, ThemeId
from learnlog.domain.journal.entities import MetaNote
from learnlog.infrastructure.common.query_helpers import column_values, keyset_before
from learnlog.infrastructure.journal.mappers.note_mapper import NoteMapper
from learnlog.models import MetaNote as MetaNoteORM
from learnlog.models import MetaNoteTheme as MetaNoteThemeORM
from learnlog.utils import utcnow


class NoteRepository:
    """Repository for MetaNote domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = NoteMapper()

    def find_page(
        self, owner_id: OwnerId, filters: NoteListFilters, page: PageRequest[NoteCursor]
    ) -> list[MetaNote]:
        """
        Fetch one page of notes plus one look-ahead row.

        Ordered by ``(note_date, created_at, id)`` descending. The theme filter
        matches notes linked to that theme.
        """
        stmt = select(MetaNoteORM).where(MetaNoteORM.owner_id == owner_id.value)
        if filters.category is not None:
            stmt = stmt.where(MetaNoteORM.category == filters.category)
        if filters.theme_id is not None:
            stmt = stmt.where(
                select(MetaNoteThemeORM.meta_note_id)
                .where(
                    MetaNoteThemeORM.meta_note_id == MetaNoteORM.id,
                    MetaNoteThemeORM.theme_id == filters.theme_id.value,
                )
                .exists()
            )
        if filters.start is not None:
            stmt = stmt.where(MetaNoteORM.note_date >= filters.start)
        if filters.end is not None:
            stmt = stmt.where(MetaNoteORM.note_date <= filters.end)
        if page.cursor is not None:
            stmt = stmt.where(
                keyset_before(
                    (MetaNoteORM.note_date, MetaNoteORM.created_at, MetaNoteORM.id),
                    (page.cursor.note_date, page.cursor.created_at, page.cursor.id),
                )
            )
        stmt = stmt.order_by(
            MetaNoteORM.note_date.desc(),
            MetaNoteORM.created_at.desc(),
            MetaNoteORM.id.desc(),
        ).limit(page.fetch_size)

        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_id(self, note_id: NoteId, owner_id: OwnerId) -> MetaNote | None:
        """Find a non-deleted note by ID with ownership check."""
        stmt = (
            select(MetaNoteORM)
            .where(MetaNoteORM.id == note_id.value, MetaNoteORM.owner_id == owner_id.value)
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, note: MetaNote) -> MetaNote:
        """Insert a note and its theme links in one transaction."""
        orm_model = self.mapper.to_orm(note)
        try:
            self.db.add(orm_model)
            # The note row must exist before its links reference it
            self.db.flush()
            self.db.add_all(self.mapper.to_link_orms(note, utcnow()))
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        saved = self.find_by_id(note.id, note.owner_id)
        assert saved is not None
        return saved

    def update(
        self,
        note_id: NoteId,
        owner_id: OwnerId,
        changes: dict[str, object],
        theme_ids: list[ThemeId] | None = None,
    ) -> MetaNote | None:
        """
        Apply a partial update to a non-deleted note.

        When ``theme_ids`` is given, every existing link is removed and the new
        set inserted in the same transaction. ``note_date`` is never written.

        Returns:
            The updated note, or None if no live note matched
        """
        now = utcnow()
        values = column_values(changes)
        values.pop("note_date", None)
        stmt = (
            update(MetaNoteORM)
            .where(
                MetaNoteORM.id == note_id.value,
                MetaNoteORM.owner_id == owner_id.value,
                MetaNoteORM.state != ResourceState.DELETED,
            )
            .values(**values, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        try:
            if self.db.execute(stmt).rowcount == 0:  # type: ignore[attr-defined]
                self.db.rollback()
                return None
            if theme_ids is not None:
                self._replace_theme_links(note_id, theme_ids, now)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return self.find_by_id(note_id, owner_id)

    def soft_delete(self, note_id: NoteId, owner_id: OwnerId, now: datetime) -> bool:
        """Logically delete a note. Theme links are kept. Returns False if nothing matched."""
        stmt = (
            update(MetaNoteORM)
            .where(
                MetaNoteORM.id == note_id.value,
                MetaNoteORM.owner_id == owner_id.value,
                MetaNoteORM.state.in_(source_states(ResourceState.DELETED)),
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

    def _replace_theme_links(
        self, note_id: NoteId, theme_ids: list[ThemeId], now: datetime
    ) -> None:
        self.db.execute(
            delete(MetaNoteThemeORM).where(MetaNoteThemeORM.meta_note_id == note_id.value)
        )
        self.db.add_all(self.mapper.link_orms(note_id, theme_ids, now))
