"""
Application common module.

Contains shared building blocks for the application layer:
- encode_cursor / decode_cursor: opaque pagination cursor codec
- PageRequest / CursorPage / paginate: keyset pagination
"""

from .cursor import decode_cursor, encode_cursor
from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, CursorPage, PageRequest, paginate

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "CursorPage",
    "PageRequest",
    "decode_cursor",
    "encode_cursor",
    "paginate",
]
