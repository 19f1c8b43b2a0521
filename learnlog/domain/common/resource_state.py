"""
Lifecycle state machine shared by every journal entity.

States:
    ACTIVE    initial state
    ARCHIVED  hidden from default theme listings, still readable
    DELETED   logical delete; terminal and invisible to default queries

Transitions:
    ACTIVE   -> ARCHIVED | DELETED
    ARCHIVED -> ACTIVE | DELETED
    DELETED  -> (none)

Only the move to DELETED is driven by the API. ACTIVE <-> ARCHIVED is a valid
model transition but is set outside the application.
"""

from datetime import datetime
from enum import StrEnum

from .exceptions import InvalidStateTransitionError


class ResourceState(StrEnum):
    """Lifecycle state of a Theme, LearningLogEntry or MetaNote."""

    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"
    DELETED = "DELETED"


INITIAL_STATE = ResourceState.ACTIVE

_ALLOWED_TRANSITIONS: dict[ResourceState, frozenset[ResourceState]] = {
    ResourceState.ACTIVE: frozenset({ResourceState.ARCHIVED, ResourceState.DELETED}),
    ResourceState.ARCHIVED: frozenset({ResourceState.ACTIVE, ResourceState.DELETED}),
    ResourceState.DELETED: frozenset(),
}


def can_transition(current: ResourceState, target: ResourceState) -> bool:
    """Check whether moving from ``current`` to ``target`` is allowed."""
    return target in _ALLOWED_TRANSITIONS[current]


def transition(current: ResourceState, target: ResourceState) -> ResourceState:
    """
    Validate a state transition and return the new state.

    Raises:
        InvalidStateTransitionError: If the transition is not allowed
    """
    if not can_transition(current, target):
        raise InvalidStateTransitionError(current.value, target.value)
    return target


def source_states(target: ResourceState) -> frozenset[ResourceState]:
    """Return every state from which ``target`` can be reached."""
    return frozenset(
        state for state, targets in _ALLOWED_TRANSITIONS.items() if target in targets
    )


def state_change_values(target: ResourceState, now: datetime) -> dict[str, object]:
    """
    Column values stamped by a bulk transition to ``target``.

    Repositories combine these with a ``state IN source_states(target)``
    predicate so that rows already in a terminal state never match.
    """
    if not source_states(target):
        raise InvalidStateTransitionError("*", target.value)
    return {"state": target, "state_changed_at": now, "updated_at": now}
