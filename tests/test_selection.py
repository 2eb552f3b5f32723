"""Tests for the card selection helper."""

import pytest
from balatro_rules.engine.errors import InvalidIndexError, SelectionLimitError
from balatro_rules.engine.selection import MAXIMUM_SELECTABLE_CARDS, CardSelection


class TestSelect:
    def test_select_up_to_limit(self):
        selection = CardSelection()
        for i in range(MAXIMUM_SELECTABLE_CARDS):
            selection.select(i)
        assert selection.indices == [0, 1, 2, 3, 4]
        with pytest.raises(SelectionLimitError):
            selection.select(5)
        assert len(selection) == MAXIMUM_SELECTABLE_CARDS

    def test_reselecting_is_a_noop(self):
        selection = CardSelection(limit=1)
        selection.select(3)
        selection.select(3)
        assert selection.indices == [3]

    def test_negative_index(self):
        with pytest.raises(InvalidIndexError):
            CardSelection().select(-1)

    def test_deselect_and_toggle(self):
        selection = CardSelection()
        selection.select(2)
        selection.deselect(2)
        assert selection.indices == []
        assert selection.toggle(4) is True
        assert selection.toggle(4) is False
        assert not selection.is_selected(4)

    def test_replace(self):
        selection = CardSelection()
        selection.replace([4, 1, 1])
        assert selection.indices == [1, 4]

    def test_replace_over_limit_keeps_old_selection(self):
        selection = CardSelection(limit=2)
        selection.replace([0])
        with pytest.raises(SelectionLimitError):
            selection.replace([1, 2, 3])
        assert selection.indices == [0]

    def test_clear(self):
        selection = CardSelection()
        selection.replace([0, 1])
        selection.clear()
        assert len(selection) == 0

    def test_validate_against_hand(self):
        selection = CardSelection()
        selection.replace([0, 7])
        assert selection.validate(8) == [0, 7]
        with pytest.raises(InvalidIndexError):
            selection.validate(7)

    def test_limit_must_be_positive(self):
        with pytest.raises(ValueError):
            CardSelection(limit=0)


class TestCursor:
    def test_next_wraps(self):
        selection = CardSelection()
        assert selection.move_next(3) == 0
        assert selection.move_next(3) == 1
        assert selection.move_next(3) == 2
        assert selection.move_next(3) == 0

    def test_prev_wraps(self):
        selection = CardSelection()
        assert selection.move_prev(3) == 2
        assert selection.move_prev(3) == 1
        assert selection.move_prev(3) == 0
        assert selection.move_prev(3) == 2

    def test_empty_hand(self):
        assert CardSelection().move_next(0) is None

    def test_select_cursor(self):
        selection = CardSelection()
        selection.select_cursor()
        assert selection.indices == []
        selection.move_next(5)
        selection.move_next(5)
        selection.select_cursor()
        assert selection.indices == [1]
        selection.deselect_cursor()
        assert selection.indices == []

    def test_select_cursor_refused_at_limit(self):
        selection = CardSelection(limit=1)
        selection.select(0)
        selection.move_prev(4)
        with pytest.raises(SelectionLimitError):
            selection.select_cursor()
