"""
Clamped page arithmetic shared by the list navigator.
"""

from dataclasses import dataclass
from typing import List, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class PageWindow:
    """
    Fixed-size window over an ordered sequence of ``total`` items.

    ``index`` is the page number and always stays within
    ``0 .. max(0, ceil(total / size) - 1)``; moving past either end is a
    no-op rather than a wraparound.

    Example:
        >>> w = PageWindow(size=10, total=12)
        >>> w.next(), w.index, w.count
        (True, 1, 2)
        >>> w.next()
        False
    """

    size: int
    total: int
    index: int = 0

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"page size must be positive, got {self.size}")
        if self.total < 0:
            raise ValueError(f"item count cannot be negative, got {self.total}")
        self.index = self._clamp(self.index)

    @property
    def page_count(self) -> int:
        return max(1, -(-self.total // self.size))

    @property
    def last_index(self) -> int:
        return self.page_count - 1

    @property
    def offset(self) -> int:
        """Absolute position of the first item on the current page."""
        return self.index * self.size

    @property
    def count(self) -> int:
        """Number of items on the current page."""
        return max(0, min(self.size, self.total - self.offset))

    def _clamp(self, index: int) -> int:
        return max(0, min(int(index), self.last_index))

    def _move_to(self, index: int) -> bool:
        new_index = self._clamp(index)
        changed = new_index != self.index
        self.index = new_index
        return changed

    def previous(self) -> bool:
        return self._move_to(self.index - 1)

    def next(self) -> bool:
        return self._move_to(self.index + 1)

    def first(self) -> bool:
        return self._move_to(0)

    def last(self) -> bool:
        return self._move_to(self.last_index)

    def contains(self, position: int) -> bool:
        """True if the page-relative position addresses an item on this page."""
        return 0 <= position < self.count

    def absolute(self, position: int) -> int:
        if not self.contains(position):
            raise IndexError(f"position {position} is not on page {self.index}")
        return self.offset + position

    def visible(self, items: Sequence[T]) -> List[T]:
        return list(items[self.offset : self.offset + self.count])
