"""
Single-page view for external pagination control.

Lets an API backend return one page plus a JSON-friendly cursor to its
frontend, and resume from that cursor on the next request.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class PageResult(Generic[T]):
    """
    Represents a single page of results with pagination cursor.

    Attributes:
        items: Items of this page, as plain Python values
        next_cursor: Cursor for the next page (None if no more pages)
        count: Number of items in this page
    """

    items: list[T]
    next_cursor: Any | None
    count: int

    @property
    def has_more(self) -> bool:
        """Returns True if there are more pages available."""
        return self.next_cursor is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": self.items,
            "next_cursor": self.next_cursor,
            "count": self.count,
            "has_more": self.has_more,
        }
