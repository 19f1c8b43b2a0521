"""
Domain common module.

Contains base classes for domain modeling:
- Entity / EntityId: owned objects with identity and lifecycle
- ResourceState: the ACTIVE / ARCHIVED / DELETED state machine
- DomainError and its subclasses
"""

from .entity import Entity, EntityId
from .exceptions import DomainError, InvalidStateTransitionError, ValidationError
from .resource_state import (
    INITIAL_STATE,
    ResourceState,
    can_transition,
    source_states,
    state_change_values,
    transition,
)

__all__ = [
    "INITIAL_STATE",
    "DomainError",
    "Entity",
    "EntityId",
    "InvalidStateTransitionError",
    "ResourceState",
    "ValidationError",
    "can_transition",
    "source_states",
    "state_change_values",
    "transition",
]
