"""
Card selection for the hand on display.
A bounded set of hand indices plus a cursor for keyboard-style navigation.
"""

from typing import Iterable, Optional

from .deck import validate_indices
from .errors import InvalidIndexError, SelectionLimitError

MAXIMUM_SELECTABLE_CARDS = 5


class CardSelection:
    """Selected hand indices, at most `limit` of them."""

    def __init__(self, limit: int = MAXIMUM_SELECTABLE_CARDS):
        if limit < 1:
            raise ValueError(f"Selection limit must be positive, got {limit}")
        self.limit = limit
        self.cursor: Optional[int] = None
        self._selected: set[int] = set()

    @property
    def indices(self) -> list[int]:
        return sorted(self._selected)

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def select(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise InvalidIndexError(index, self.limit)
        if index in self._selected:
            return
        if len(self._selected) >= self.limit:
            raise SelectionLimitError(len(self._selected) + 1, self.limit)
        self._selected.add(index)

    def deselect(self, index: int) -> None:
        self._selected.discard(index)

    def toggle(self, index: int) -> bool:
        """Flip selection of an index. Returns whether it is now selected."""
        if index in self._selected:
            self.deselect(index)
            return False
        self.select(index)
        return True

    def replace(self, indices: Iterable[int]) -> None:
        """Swap the whole selection; the old one is kept if the new one is rejected."""
        unique = set()
        for index in indices:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise InvalidIndexError(index, self.limit)
            unique.add(index)
        if len(unique) > self.limit:
            raise SelectionLimitError(len(unique), self.limit)
        self._selected = unique

    def clear(self) -> None:
        self._selected.clear()

    def move_next(self, hand_len: int) -> Optional[int]:
        """Move the cursor right, wrapping to the first card."""
        if hand_len <= 0:
            self.cursor = None
            return None
        start = hand_len - 1 if self.cursor is None else self.cursor
        self.cursor = (start + 1) % hand_len
        return self.cursor

    def move_prev(self, hand_len: int) -> Optional[int]:
        """Move the cursor left, wrapping to the last card."""
        if hand_len <= 0:
            self.cursor = None
            return None
        start = hand_len if self.cursor is None else self.cursor
        self.cursor = (start - 1) % hand_len
        return self.cursor

    def select_cursor(self) -> None:
        if self.cursor is not None:
            self.select(self.cursor)

    def deselect_cursor(self) -> None:
        if self.cursor is not None:
            self.deselect(self.cursor)

    def validate(self, hand_len: int) -> list[int]:
        """Selected indices, checked against the current hand length."""
        return validate_indices(self._selected, hand_len)

    def __len__(self) -> int:
        return len(self._selected)

    def __iter__(self):
        return iter(self.indices)

    def __repr__(self) -> str:
        return f"CardSelection({self.indices}, limit={self.limit})"
