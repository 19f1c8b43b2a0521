"""
Cursor pagination types for list queries.

Lists are keyset-paginated: a query fetches ``limit + 1`` rows ordered by the
entity's sort key (always ending with the id), and the extra row only signals
that another page exists.

Example:
    rows = repository.find_page(owner_id, filters, page_request)  # limit + 1 rows
    return paginate(rows, page_request.limit, lambda log: LogCursor.of(log).encode())
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
C = TypeVar("C")

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


@dataclass(frozen=True)
class PageRequest(Generic[C]):
    """
    Pagination parameters for list queries.

    Attributes:
        limit: Maximum number of items to return (1..MAX_PAGE_SIZE)
        cursor: Decoded sort key of the last item already seen, if any
    """

    limit: int = DEFAULT_PAGE_SIZE
    cursor: C | None = None

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ValueError("Limit must be at least 1")
        if self.limit > MAX_PAGE_SIZE:
            raise ValueError(f"Limit cannot exceed {MAX_PAGE_SIZE}")

    @property
    def fetch_size(self) -> int:
        """Rows to fetch: one more than the limit, to detect a next page."""
        return self.limit + 1


@dataclass(frozen=True)
class CursorPage(Generic[T]):
    """
    One page of a keyset-paginated list.

    Attributes:
        items: Items of the current page, in sort order
        next_cursor: Opaque cursor for the next page, None at the end
    """

    items: list[T]
    next_cursor: str | None

    @property
    def has_next(self) -> bool:
        """Check if there is a next page."""
        return self.next_cursor is not None


def paginate(rows: Sequence[T], limit: int, cursor_of: Callable[[T], str]) -> CursorPage[T]:
    """
    Build a page from ``limit + 1`` fetched rows.

    If more than ``limit`` rows came back, the surplus is dropped and the next
    cursor is derived from the last retained row.
    """
    if len(rows) > limit:
        items = list(rows[:limit])
        return CursorPage(items=items, next_cursor=cursor_of(items[-1]))
    return CursorPage(items=list(rows), next_cursor=None)
