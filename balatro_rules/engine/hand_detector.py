"""
Hand detection for played cards.
Identifies the best poker hand, including the biased-deck hands
(Flush Five, Flush House, Five of a Kind).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .deck import Card, Rank, grouped_by_rank, grouped_by_suit, sort_by_rank


class ScoringHand(Enum):
    """Poker hand categories, in scoring precedence (best first)."""
    FLUSH_FIVE = "Flush Five"
    FLUSH_HOUSE = "Flush House"
    FIVE_OF_A_KIND = "Five of a Kind"
    ROYAL_FLUSH = "Royal Flush"
    STRAIGHT_FLUSH = "Straight Flush"
    FOUR_OF_A_KIND = "Four of a Kind"
    FULL_HOUSE = "Full House"
    FLUSH = "Flush"
    STRAIGHT = "Straight"
    THREE_OF_A_KIND = "Three of a Kind"
    TWO_PAIR = "Two Pair"
    PAIR = "Pair"
    HIGH_CARD = "High Card"

    @classmethod
    def parse(cls, text: str) -> "ScoringHand":
        """Look up a hand by display name, e.g. "Four of a Kind"."""
        wanted = text.strip().lower()
        for hand in cls:
            if hand.value.lower() == wanted:
                return hand
        raise ValueError(f"Unknown scoring hand: {text!r}")

    def __str__(self) -> str:
        return self.value


# Base chips and mult for each hand type
HAND_BASE_VALUES = {
    ScoringHand.FLUSH_FIVE: (160, 16),
    ScoringHand.FLUSH_HOUSE: (140, 14),
    ScoringHand.FIVE_OF_A_KIND: (120, 12),
    ScoringHand.ROYAL_FLUSH: (100, 8),
    ScoringHand.STRAIGHT_FLUSH: (60, 7),
    ScoringHand.FOUR_OF_A_KIND: (40, 4),
    ScoringHand.FULL_HOUSE: (35, 4),
    ScoringHand.FLUSH: (30, 4),
    ScoringHand.STRAIGHT: (30, 3),
    ScoringHand.THREE_OF_A_KIND: (20, 2),
    ScoringHand.TWO_PAIR: (20, 2),
    ScoringHand.PAIR: (10, 2),
    ScoringHand.HIGH_CARD: (5, 1),
}

FLUSH_SIZE = 5
STRAIGHT_SIZE = 5

# Bit n is set for rank ordinal n. Ace sits on bit 1 when played low and
# bit 14 when played high.
LOW_ACE_BIT = 1 << 1
HIGH_ACE_BIT = 1 << 14
STRAIGHT_RUN = (1 << STRAIGHT_SIZE) - 1
LOW_ACE_STRAIGHT = STRAIGHT_RUN << 1     # 5-4-3-2-A
HIGH_ACE_STRAIGHT = STRAIGHT_RUN << 10   # A-K-Q-J-10
STRAIGHT_MASKS = frozenset(STRAIGHT_RUN << shift for shift in range(1, 11))


@dataclass
class StraightReport:
    """Outcome of a successful straight test."""
    high_ace: Optional[bool]   # None when no Ace is part of the run
    scored_ranks: list[Rank]


@dataclass
class DetectedHand:
    """Result of hand detection."""
    hand: ScoringHand
    scored_ranks: list[Rank]   # Ranks that contribute chips
    cards: list[Card]          # All played cards, rank-sorted
    high_ace: Optional[bool] = None

    @property
    def base_chips(self) -> int:
        return HAND_BASE_VALUES[self.hand][0]

    @property
    def base_multiplier(self) -> int:
        return HAND_BASE_VALUES[self.hand][1]


def _rank_mask(ranks: set[Rank], high_ace: bool) -> int:
    mask = 0
    for rank in ranks:
        if rank is Rank.ACE:
            mask |= HIGH_ACE_BIT if high_ace else LOW_ACE_BIT
        else:
            mask |= 1 << rank.value
    return mask


def _ranks_from_mask(mask: int) -> list[Rank]:
    """Ranks of a straight mask, highest bit first."""
    ranks = []
    for bit in range(14, 0, -1):
        if mask & (1 << bit):
            ranks.append(Rank.ACE if bit in (1, 14) else Rank(bit))
    return ranks


def check_straight(cards: list[Card]) -> Optional[StraightReport]:
    """Check whether the distinct ranks of the cards form a five-rank run."""
    ranks = {c.rank for c in cards}
    if len(ranks) != STRAIGHT_SIZE:
        return None

    has_ace = Rank.ACE in ranks
    high_mask = _rank_mask(ranks, high_ace=True)
    if high_mask in STRAIGHT_MASKS:
        high_ace = True if high_mask == HIGH_ACE_STRAIGHT else None
        return StraightReport(high_ace=high_ace, scored_ranks=_ranks_from_mask(high_mask))

    low_mask = _rank_mask(ranks, high_ace=False)
    if has_ace and low_mask == LOW_ACE_STRAIGHT:
        return StraightReport(high_ace=False, scored_ranks=_ranks_from_mask(low_mask))

    return None


def detect_hand(cards: list[Card]) -> Optional[DetectedHand]:
    """Detect the best hand from the played cards. None for no cards."""
    if not cards:
        return None

    sorted_cards = sort_by_rank(cards)
    rank_groups = grouped_by_rank(sorted_cards)
    suit_groups = grouped_by_suit(sorted_cards)
    straight = check_straight(sorted_cards)

    top_rank, top_count = rank_groups[0]
    second_count = rank_groups[1][1] if len(rank_groups) > 1 else 0
    is_flush = suit_groups[0][1] == FLUSH_SIZE
    is_full_house = top_count == 3 and second_count == 2
    is_two_pair = top_count == 2 and second_count == 2

    def of_a_kind(hand: ScoringHand) -> DetectedHand:
        return DetectedHand(hand, [top_rank] * top_count, sorted_cards)

    def two_groups(hand: ScoringHand) -> DetectedHand:
        (first, first_n), (second, second_n) = rank_groups[0], rank_groups[1]
        return DetectedHand(hand, [first] * first_n + [second] * second_n, sorted_cards)

    # Determine hand type (from best to worst)
    if is_flush and top_count == 5:
        return of_a_kind(ScoringHand.FLUSH_FIVE)

    if is_flush and is_full_house:
        return two_groups(ScoringHand.FLUSH_HOUSE)

    if top_count == 5:
        return of_a_kind(ScoringHand.FIVE_OF_A_KIND)

    if is_flush and straight and straight.high_ace:
        return DetectedHand(ScoringHand.ROYAL_FLUSH, straight.scored_ranks,
                            sorted_cards, straight.high_ace)

    if is_flush and straight:
        return DetectedHand(ScoringHand.STRAIGHT_FLUSH, straight.scored_ranks,
                            sorted_cards, straight.high_ace)

    if top_count == 4:
        return of_a_kind(ScoringHand.FOUR_OF_A_KIND)

    if is_full_house:
        return two_groups(ScoringHand.FULL_HOUSE)

    if is_flush:
        return DetectedHand(ScoringHand.FLUSH, [c.rank for c in sorted_cards], sorted_cards)

    if straight:
        return DetectedHand(ScoringHand.STRAIGHT, straight.scored_ranks,
                            sorted_cards, straight.high_ace)

    if top_count == 3:
        return of_a_kind(ScoringHand.THREE_OF_A_KIND)

    if is_two_pair:
        return two_groups(ScoringHand.TWO_PAIR)

    if top_count == 2:
        return of_a_kind(ScoringHand.PAIR)

    # High card - just the highest card
    return DetectedHand(ScoringHand.HIGH_CARD, [sorted_cards[0].rank], sorted_cards)


def classify(cards: list[Card]) -> tuple[Optional[ScoringHand], list[Rank]]:
    """Scoring hand and scored ranks for the cards; (None, []) for no cards."""
    detected = detect_hand(cards)
    if detected is None:
        return None, []
    return detected.hand, detected.scored_ranks
