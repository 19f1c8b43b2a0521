import os
import time
from dataclasses import dataclass
from typing import Self
from uuid import UUID

from ..entity import EntityId

_UUID_VERSION_7 = 0x7
_UUID_VARIANT_RFC4122 = 0b10


def new_resource_id() -> UUID:
    """
    Generate a time-ordered (version 7 layout) UUID.

    The leading 48 bits hold the Unix time in milliseconds so ids sort
    roughly by creation time, which keeps them usable as the final
    tiebreaker in time-ordered pagination.
    """
    unix_ms = time.time_ns() // 1_000_000
    rand = int.from_bytes(os.urandom(10), "big")
    rand_a = rand >> 68  # 12 bits
    rand_b = rand & ((1 << 62) - 1)
    value = (
        (unix_ms & ((1 << 48) - 1)) << 80
        | _UUID_VERSION_7 << 76
        | rand_a << 64
        | _UUID_VARIANT_RFC4122 << 62
        | rand_b
    )
    return UUID(int=value)


@dataclass(frozen=True)
class OwnerId(EntityId):
    """Strongly-typed identifier of the user who owns a resource."""

    value: UUID


@dataclass(frozen=True)
class ThemeId(EntityId):
    """Strongly-typed theme identifier."""

    value: UUID

    @classmethod
    def generate(cls) -> Self:
        return cls(new_resource_id())


@dataclass(frozen=True)
class LogId(EntityId):
    """Strongly-typed learning log entry identifier."""

    value: UUID

    @classmethod
    def generate(cls) -> Self:
        return cls(new_resource_id())


@dataclass(frozen=True)
class NoteId(EntityId):
    """Strongly-typed meta note identifier."""

    value: UUID

    @classmethod
    def generate(cls) -> Self:
        return cls(new_resource_id())
