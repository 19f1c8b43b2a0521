"""Database models."""

import uuid
from datetime import date, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Text,
    UniqueConstraint,
    Uuid,
    false,
    text,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnlog.database import Base
from learnlog.domain.common.resource_state import INITIAL_STATE, ResourceState
from learnlog.domain.common.value_objects.ids import new_resource_id
from learnlog.domain.journal.entities.meta_note import MetaNoteCategory
from learnlog.utils import utcnow

_NOT_DELETED = text("state <> 'DELETED'")

resource_state_enum = SAEnum(ResourceState, name="resource_state")
note_category_enum = SAEnum(MetaNoteCategory, name="meta_note_category")


class Theme(Base):
    """Learning goal owned by a single user."""

    __tablename__ = "themes"
    __table_args__ = (
        # Target of the owner-aware composite foreign keys below
        UniqueConstraint("owner_id", "id", name="uq_themes_owner_id_id"),
        Index("ix_themes_owner_created", "owner_id", "created_at", "id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_resource_id)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    short_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    goal: Mapped[str] = mapped_column(Text, nullable=False)
    is_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    state: Mapped[ResourceState] = mapped_column(
        resource_state_enum, nullable=False, default=INITIAL_STATE
    )
    state_changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        """String representation of Theme."""
        return f"<Theme(id={self.id}, name='{self.name}', state={self.state})>"


class LearningLogEntry(Base):
    """Daily learning log for one theme."""

    __tablename__ = "learning_log_entries"
    __table_args__ = (
        ForeignKeyConstraint(
            ["owner_id", "theme_id"],
            ["themes.owner_id", "themes.id"],
            name="fk_learning_log_entries_owner_theme",
        ),
        UniqueConstraint("owner_id", "id", name="uq_learning_log_entries_owner_id_id"),
        # One live log per theme and day; deleted rows do not count
        Index(
            "uq_learning_log_entries_owner_theme_date_live",
            "owner_id",
            "theme_id",
            "date",
            unique=True,
            postgresql_where=_NOT_DELETED,
            sqlite_where=_NOT_DELETED,
        ),
        Index("ix_learning_log_entries_owner_date", "owner_id", "date", "created_at", "id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_resource_id)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    theme_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    state: Mapped[ResourceState] = mapped_column(
        resource_state_enum, nullable=False, default=INITIAL_STATE
    )
    state_changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        """String representation of LearningLogEntry."""
        return f"<LearningLogEntry(id={self.id}, theme_id={self.theme_id}, date={self.date})>"


class MetaNote(Base):
    """Reflection note, optionally linked to themes and one log."""

    __tablename__ = "meta_notes"
    __table_args__ = (
        ForeignKeyConstraint(
            ["owner_id", "related_log_id"],
            ["learning_log_entries.owner_id", "learning_log_entries.id"],
            name="fk_meta_notes_owner_related_log",
        ),
        Index("ix_meta_notes_owner_note_date", "owner_id", "note_date", "created_at", "id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_resource_id)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    category: Mapped[MetaNoteCategory] = mapped_column(note_category_enum, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    note_date: Mapped[date] = mapped_column(Date, nullable=False)
    related_log_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    state: Mapped[ResourceState] = mapped_column(
        resource_state_enum, nullable=False, default=INITIAL_STATE
    )
    state_changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    theme_links: Mapped[list["MetaNoteTheme"]] = relationship(
        back_populates="meta_note",
        lazy="selectin",
        order_by="MetaNoteTheme.created_at, MetaNoteTheme.theme_id",
    )

    def __repr__(self) -> str:
        """String representation of MetaNote."""
        return f"<MetaNote(id={self.id}, category={self.category}, note_date={self.note_date})>"


class MetaNoteTheme(Base):
    """Link between a note and a theme; lives and dies with the note's link set."""

    __tablename__ = "meta_note_themes"

    meta_note_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("meta_notes.id", ondelete="CASCADE"), primary_key=True
    )
    theme_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("themes.id"), primary_key=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    meta_note: Mapped[MetaNote] = relationship(back_populates="theme_links")

    def __repr__(self) -> str:
        """String representation of MetaNoteTheme."""
        return f"<MetaNoteTheme(meta_note_id={self.meta_note_id}, theme_id={self.theme_id})>"
