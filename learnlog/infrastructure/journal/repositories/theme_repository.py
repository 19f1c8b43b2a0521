"""Repository for Theme domain entities."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnlog.application.common.pagination import PageRequest
from learnlog.application.journal.cursors import ThemeCursor
from learnlog.application.journal.dtos import ThemeDeletion, ThemeListFilters
from learnlog.domain.common.resource_state import (
    ResourceState,
    source_states,
    state_change_values,
)
from learnlog.domain.common.value_objects.ids import OwnerId, ThemeId
from learnlog.domain.journal.entities import Theme, ThemeSummary
from learnlog.infrastructure.common.query_helpers import column_values, keyset_after
from learnlog.infrastructure.journal.mappers.theme_mapper import ThemeMapper
from learnlog.models import LearningLogEntry as LearningLogEntryORM
from learnlog.models import MetaNote as MetaNoteORM
from learnlog.models import MetaNoteTheme as MetaNoteThemeORM
from learnlog.models import Theme as ThemeORM
from learnlog.utils import utcnow

_DELETABLE = source_states(ResourceState.DELETED)


class ThemeRepository:
    """Repository for Theme domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ThemeMapper()

    def find_page(
        self, owner_id: OwnerId, filters: ThemeListFilters, page: PageRequest[ThemeCursor]
    ) -> list[Theme]:
        """
        Fetch one page of themes plus one look-ahead row.

        Args:
            owner_id: Owner of the themes
            filters: ``include_completed`` / ``include_archived`` flags
            page: Page size and decoded cursor

        Returns:
            Up to ``page.fetch_size`` themes ordered by ``(created_at, id)``
        """
        stmt = select(ThemeORM).where(ThemeORM.owner_id == owner_id.value)
        if not filters.include_completed:
            stmt = stmt.where(ThemeORM.is_completed.is_(False))
        if not filters.include_archived:
            stmt = stmt.where(ThemeORM.state == ResourceState.ACTIVE)
        if page.cursor is not None:
            stmt = stmt.where(
                keyset_after(
                    (ThemeORM.created_at, ThemeORM.id),
                    (page.cursor.created_at, page.cursor.id),
                )
            )
        stmt = stmt.order_by(ThemeORM.created_at.asc(), ThemeORM.id.asc()).limit(page.fetch_size)

        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_id(self, theme_id: ThemeId, owner_id: OwnerId) -> Theme | None:
        """Find a non-deleted theme by ID with ownership check."""
        stmt = (
            select(ThemeORM)
            .where(ThemeORM.id == theme_id.value, ThemeORM.owner_id == owner_id.value)
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_summaries(self, theme_ids: list[ThemeId], owner_id: OwnerId) -> list[ThemeSummary]:
        """
        Get id and name of the visible themes among ``theme_ids``.

        Missing, deleted or foreign themes are left out; the others keep the
        order of ``theme_ids``.
        """
        if not theme_ids:
            return []

        stmt = select(ThemeORM.id, ThemeORM.name).where(
            ThemeORM.owner_id == owner_id.value,
            ThemeORM.id.in_([theme_id.value for theme_id in theme_ids]),
        )
        names = {row.id: row.name for row in self.db.execute(stmt)}
        return [
            ThemeSummary(id=theme_id, name=names[theme_id.value])
            for theme_id in theme_ids
            if theme_id.value in names
        ]

    def save(self, theme: Theme) -> Theme:
        """Insert a new theme and return it with storage-assigned values."""
        orm_model = self.mapper.to_orm(theme)
        try:
            self.db.add(orm_model)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def update(
        self, theme_id: ThemeId, owner_id: OwnerId, changes: dict[str, object]
    ) -> Theme | None:
        """
        Apply a partial update to a non-deleted theme.

        Returns:
            The updated theme, or None if no live theme matched
        """
        stmt = (
            update(ThemeORM)
            .where(
                ThemeORM.id == theme_id.value,
                ThemeORM.owner_id == owner_id.value,
                ThemeORM.state != ResourceState.DELETED,
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
        return self.find_by_id(theme_id, owner_id)

    def soft_delete(
        self, theme_id: ThemeId, owner_id: OwnerId, now: datetime
    ) -> ThemeDeletion | None:
        """
        Logically delete a theme, its live logs and every live note linked to it.

        All rows are stamped with the same ``now`` and committed together; any
        failure rolls the whole cascade back.

        Returns:
            Counts of cascaded rows, or None if no live theme matched
        """
        try:
            if not self._delete_theme_row(theme_id, owner_id, now):
                self.db.rollback()
                return None
            log_count = self._delete_theme_logs(theme_id, owner_id, now)
            note_count = self._delete_linked_notes(theme_id, owner_id, now)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return ThemeDeletion(log_count=log_count, note_count=note_count)

    def _delete_theme_row(self, theme_id: ThemeId, owner_id: OwnerId, now: datetime) -> bool:
        stmt = (
            update(ThemeORM)
            .where(
                ThemeORM.id == theme_id.value,
                ThemeORM.owner_id == owner_id.value,
                ThemeORM.state.in_(_DELETABLE),
            )
            .values(**state_change_values(ResourceState.DELETED, now))
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount > 0  # type: ignore[attr-defined]

    def _delete_theme_logs(self, theme_id: ThemeId, owner_id: OwnerId, now: datetime) -> int:
        stmt = (
            update(LearningLogEntryORM)
            .where(
                LearningLogEntryORM.owner_id == owner_id.value,
                LearningLogEntryORM.theme_id == theme_id.value,
                LearningLogEntryORM.state.in_(_DELETABLE),
            )
            .values(**state_change_values(ResourceState.DELETED, now))
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount  # type: ignore[attr-defined]

    def _delete_linked_notes(self, theme_id: ThemeId, owner_id: OwnerId, now: datetime) -> int:
        linked_note_ids = select(MetaNoteThemeORM.meta_note_id).where(
            MetaNoteThemeORM.theme_id == theme_id.value
        )
        stmt = (
            update(MetaNoteORM)
            .where(
                MetaNoteORM.owner_id == owner_id.value,
                MetaNoteORM.id.in_(linked_note_ids),
                MetaNoteORM.state.in_(_DELETABLE),
            )
            .values(**state_change_values(ResourceState.DELETED, now))
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount  # type: ignore[attr-defined]
