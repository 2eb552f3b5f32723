"""
Game facade used by front-ends.
Wraps a Run and the player's card selection behind simple queries and actions.
"""

import logging
from typing import Iterable, Optional

from .blind import Blind
from .deck import Card, validate_indices
from .round import RoundState
from .run import Run, RunProperties, RunState
from .scoring import ScoreBreakdown
from .selection import CardSelection

logger = logging.getLogger(__name__)


class Game:
    """
    Everything a UI needs to drive a run.

    Select cards, then play or discard them. The selection is cleared after
    every action, whether it succeeded or not.
    """

    def __init__(self, properties: RunProperties = None, preset_name: str = "standard"):
        self.preset_name = preset_name
        self.run = Run.new(properties, preset_name=preset_name)
        self.selection = CardSelection()

    # Queries

    @property
    def properties(self) -> RunProperties:
        return self.run.properties

    @property
    def hand(self) -> list[Card]:
        return list(self.run.round.hand)

    @property
    def hands_remaining(self) -> int:
        return self.run.round.hands_remaining

    @property
    def discards_remaining(self) -> int:
        return self.run.round.discards_remaining

    @property
    def score(self) -> int:
        return self.run.round.score

    @property
    def target_score(self) -> int:
        return self.run.round.target_score

    @property
    def money(self) -> int:
        return self.run.money

    @property
    def ante(self) -> int:
        return self.run.ante

    @property
    def round_number(self) -> int:
        return self.run.round_number

    @property
    def blind(self) -> Blind:
        return self.run.blind

    @property
    def is_over(self) -> bool:
        return self.run.state.finished

    @property
    def won(self) -> bool:
        return self.run.state is RunState.WON

    @property
    def round_won(self) -> bool:
        return self.run.round.state is RoundState.WON

    @property
    def deck_size(self) -> int:
        return len(self.run.deck)

    @property
    def history(self):
        return self.run.history

    def preview(self) -> Optional[ScoreBreakdown]:
        """Score breakdown for the current selection, or None if nothing is selected."""
        if not self.selection:
            return None
        return self.run.round.preview(self.selection.validate(len(self.run.round.hand)))

    # Mutations

    def start_run(self) -> None:
        self.run.start()

    def select_for_play(self, indices: Iterable[int]) -> None:
        self._select(indices)

    def select_for_discard(self, indices: Iterable[int]) -> None:
        self._select(indices)

    def _select(self, indices: Iterable[int]):
        indices = validate_indices(indices, len(self.run.round.hand))
        self.selection.replace(indices)

    def play_hand(self) -> Optional[ScoreBreakdown]:
        try:
            return self.run.play_hand(self.selection.indices)
        finally:
            self.selection.clear()

    def discard_hand(self) -> list[Card]:
        try:
            return self.run.discard_hand(self.selection.indices)
        finally:
            self.selection.clear()

    def next_round(self) -> None:
        self.selection.clear()
        self.run.next_round()

    def new_run(self, properties: RunProperties = None, preset_name: str = None) -> None:
        """Throw away the current run and start a fresh one."""
        if preset_name is not None:
            self.preset_name = preset_name
        self.run = Run.new(properties, preset_name=self.preset_name)
        self.selection = CardSelection()
        self.run.start()
        logger.info("New run with seed %s", self.run.properties.seed)
