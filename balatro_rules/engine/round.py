"""
A single round against one blind.
Tracks hands and discards left, the accumulated score and the cards in hand.
The run's deck is passed in to every action that draws.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from .blind import MAX_ANTE, Blind
from .deck import Card, Deck, Hand, validate_indices
from .errors import (
    DiscardsExhaustedError,
    HandsExhaustedError,
    RoundStateError,
    SelectionLimitError,
)
from .scoring import ScoreBreakdown, Scorer, checked_add
from .selection import MAXIMUM_SELECTABLE_CARDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundProperties:
    ante: int
    hand_size: int
    round_number: int

    def __post_init__(self):
        if not 1 <= self.ante <= MAX_ANTE:
            raise ValueError(f"Ante must be between 1 and {MAX_ANTE}, got {self.ante}")
        if self.hand_size < 1:
            raise ValueError(f"Hand size must be positive, got {self.hand_size}")
        if self.round_number < 1:
            raise ValueError(f"Round number must be at least 1, got {self.round_number}")


class RoundState(Enum):
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def finished(self) -> bool:
        return self in (RoundState.WON, RoundState.LOST)


class Round:
    """
    One blind's worth of play.

    Actions validate everything and draw replacement cards before touching
    any state, so a failed action leaves the round exactly as it was.
    """

    def __init__(self, properties: RoundProperties, blind: Blind,
                 max_hands: int, max_discards: int):
        self.properties = properties
        self.blind = blind
        self.max_hands = max_hands
        self.max_discards = max_discards
        self.hands_remaining = max_hands
        self.discards_remaining = max_discards
        self.score = 0
        self.hand = Hand()
        self.history: list[Card] = []
        self.state = RoundState.NOT_STARTED

    @property
    def target_score(self) -> int:
        return self.blind.target_score(self.properties.ante)

    @property
    def reward(self) -> int:
        return self.blind.reward

    @property
    def hands_played(self) -> int:
        return self.max_hands - self.hands_remaining

    @property
    def discards_used(self) -> int:
        return self.max_discards - self.discards_remaining

    def start(self, deck: Deck) -> None:
        """Draw the opening hand."""
        if self.state is not RoundState.NOT_STARTED:
            raise RoundStateError(f"Round already started ({self.state.name})")
        cards = deck.draw_random(self.properties.hand_size)
        self.hand = Hand(cards)
        self.hand.sort()
        self.state = RoundState.IN_PROGRESS
        logger.debug("Round %d started against %s, target %d",
                     self.properties.round_number, self.blind, self.target_score)

    def _require_in_progress(self, action: str):
        if self.state is not RoundState.IN_PROGRESS:
            raise RoundStateError(f"Cannot {action} in a round that is {self.state.name}")

    def _select(self, indices: list[int]) -> list[int]:
        selected = validate_indices(indices, len(self.hand))
        if len(selected) > MAXIMUM_SELECTABLE_CARDS:
            raise SelectionLimitError(len(selected), MAXIMUM_SELECTABLE_CARDS)
        return selected

    def _deal(self, indices: list[int], replacements: list[Card]) -> list[Card]:
        """Swap the cards at indices for replacements; the old ones go to history."""
        removed = self.hand.drain(indices)
        self.history.extend(removed)
        self.hand.add(replacements)
        self.hand.sort()
        return removed

    def preview(self, indices: Iterable[int]) -> Optional[ScoreBreakdown]:
        """Score the selected cards without playing them."""
        cards = self.hand.peek(indices)
        if not cards:
            return None
        return Scorer.breakdown(cards)

    def play_hand(self, deck: Deck, indices: Iterable[int]) -> Optional[ScoreBreakdown]:
        """Play the cards at indices. An empty selection does nothing."""
        indices = list(indices)
        if not indices:
            return None
        if self.hands_remaining == 0:
            raise HandsExhaustedError()
        self._require_in_progress("play a hand")

        selected = self._select(indices)
        played = self.hand.peek(selected)
        breakdown = Scorer.breakdown(played)
        new_score = checked_add(self.score, breakdown.score)
        replacements = deck.draw_random(len(played))

        self._deal(selected, replacements)
        self.score = new_score
        self.hands_remaining -= 1
        logger.debug("Played %s as %s for %d (total %d/%d)",
                     " ".join(str(c) for c in played), breakdown.hand,
                     breakdown.score, self.score, self.target_score)
        return breakdown

    def discard_hand(self, deck: Deck, indices: Iterable[int]) -> list[Card]:
        """Discard the cards at indices and draw replacements."""
        indices = list(indices)
        if not indices:
            return []
        if self.discards_remaining == 0:
            raise DiscardsExhaustedError()
        self._require_in_progress("discard")

        selected = self._select(indices)
        replacements = deck.draw_random(len(selected))

        discarded = self._deal(selected, replacements)
        self.discards_remaining -= 1
        logger.debug("Discarded %s, %d discards left",
                     " ".join(str(c) for c in discarded), self.discards_remaining)
        return discarded

    def evaluate(self) -> RoundState:
        """Settle the round once the target is reached or hands run out."""
        if self.state is not RoundState.IN_PROGRESS:
            return self.state
        if self.score >= self.target_score:
            self.state = RoundState.WON
        elif self.hands_remaining == 0:
            self.state = RoundState.LOST
        if self.state.finished:
            logger.info("Round %d %s: %d/%d", self.properties.round_number,
                        self.state.name.lower(), self.score, self.target_score)
        return self.state

    def collect_cards(self) -> list[Card]:
        """Take back every card dealt this round."""
        cards = self.hand.clear() + self.history
        self.history = []
        return cards

    def __repr__(self) -> str:
        return (f"Round({self.properties.round_number}, {self.blind}, "
                f"score={self.score}/{self.target_score}, state={self.state.name})")
