"""
Base classes for Entities and their identifiers.

Entities are objects that have a distinct identity that runs through time
and different states. Two entities are equal if they have the same identity,
regardless of their attributes.

Every journal entity is owned by exactly one user and carries a lifecycle
state (see resource_state.py).

Example:
    @dataclass
    class Theme(Entity[ThemeId]):
        id: ThemeId
        owner_id: OwnerId
        name: str
        state: ResourceState
        state_changed_at: datetime
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Self, TypeVar
from uuid import UUID

from .resource_state import ResourceState, transition


@dataclass(frozen=True)
class EntityId:
    """
    Base class for strongly-typed entity identifiers.

    Entity IDs wrap a UUID. They provide type safety to prevent mixing up
    IDs of different entities.

    Example:
        theme_id = ThemeId(uuid)
        log_id = LogId(uuid)
        # These are different types, preventing accidental mixing
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise TypeError(f"{self.__class__.__name__} must wrap a UUID")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def parse(cls, raw: str) -> Self:
        """Build an identifier from its canonical string form."""
        return cls(UUID(raw))

    def to_primitive(self) -> str:
        """Convert to primitive for serialization."""
        return str(self.value)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for owned, stateful Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable (state can change over time)
    - Have lifecycle (ACTIVE, ARCHIVED, DELETED)

    Subclasses must have 'id', 'state' and 'state_changed_at' attributes.
    """

    id: IdType
    state: ResourceState
    state_changed_at: datetime | None

    @property
    def is_deleted(self) -> bool:
        """Whether the entity has been logically deleted."""
        return self.state is ResourceState.DELETED

    def change_state(self, target: ResourceState, now: datetime) -> None:
        """
        Move the entity to a new lifecycle state.

        Raises:
            InvalidStateTransitionError: If the move is not allowed
        """
        self.state = transition(self.state, target)
        self.state_changed_at = now

    def mark_deleted(self, now: datetime) -> None:
        """Logically delete the entity."""
        self.change_state(ResourceState.DELETED, now)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id}, state={self.state.value})"
