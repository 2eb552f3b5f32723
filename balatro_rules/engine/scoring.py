"""
Scoring for played hands.
Score = (Base Chips + Rank Chips) × Mult, bounded to an unsigned 64-bit range.
"""

from dataclasses import dataclass, field
from typing import Optional

from .deck import Card, Rank
from .errors import ArithmeticOverflowError, EmptyHandError
from .hand_detector import HAND_BASE_VALUES, DetectedHand, ScoringHand, classify, detect_hand

MAX_SCORE = 2 ** 64 - 1


def checked_add(a: int, b: int) -> int:
    result = a + b
    if result > MAX_SCORE:
        raise ArithmeticOverflowError("addition")
    return result


def checked_mul(a: int, b: int) -> int:
    result = a * b
    if result > MAX_SCORE:
        raise ArithmeticOverflowError("multiplication")
    return result


@dataclass
class ScoreBreakdown:
    """Detailed breakdown of how score was calculated."""
    hand: ScoringHand
    base_chips: int
    rank_chips: int
    chips: int
    multiplier: int
    score: int
    scored_ranks: list[Rank] = field(default_factory=list)
    high_ace: Optional[bool] = None

    def describe(self) -> str:
        return (f"{self.hand}: ({self.base_chips} + {self.rank_chips}) "
                f"x {self.multiplier} = {self.score}")


class Scorer:
    """
    Stateless scoring rules.

    Only the scored ranks add chips; kickers in the played cards are ignored.
    """

    @staticmethod
    def chips_and_multiplier(hand: ScoringHand) -> tuple[int, int]:
        return HAND_BASE_VALUES[hand]

    @staticmethod
    def classify(cards: list[Card]) -> tuple[Optional[ScoringHand], list[Rank]]:
        return classify(cards)

    @staticmethod
    def breakdown(cards: list[Card]) -> ScoreBreakdown:
        """Score the cards and keep every intermediate value."""
        detected = detect_hand(cards)
        if detected is None:
            raise EmptyHandError()
        return _breakdown_for(detected)

    @staticmethod
    def score(cards: list[Card]) -> int:
        return Scorer.breakdown(cards).score


def _breakdown_for(detected: DetectedHand) -> ScoreBreakdown:
    base_chips, multiplier = HAND_BASE_VALUES[detected.hand]

    rank_chips = 0
    for rank in detected.scored_ranks:
        rank_chips = checked_add(rank_chips, rank.score())

    chips = checked_add(base_chips, rank_chips)
    return ScoreBreakdown(
        hand=detected.hand,
        base_chips=base_chips,
        rank_chips=rank_chips,
        chips=chips,
        multiplier=multiplier,
        score=checked_mul(chips, multiplier),
        scored_ranks=list(detected.scored_ranks),
        high_ace=detected.high_ace,
    )


def calculate_score(cards: list[Card]) -> int:
    """Convenience function to calculate score."""
    return Scorer.score(cards)


def score_breakdown(cards: list[Card]) -> ScoreBreakdown:
    """Get detailed score breakdown."""
    return Scorer.breakdown(cards)
