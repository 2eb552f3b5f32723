"""
Card model and deck management.
Handles ranks, suits, card parsing, sorting/grouping, shuffling and drawing.
"""

import logging
import random
import re
import threading
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from .errors import DeckLockError, InsufficientCardsError, InvalidIndexError, MalformedCardError

logger = logging.getLogger(__name__)


class _OrderedEnum(Enum):
    """Enum whose members compare by `_order_key()`."""

    def _order_key(self) -> int:
        raise NotImplementedError

    def __lt__(self, other):
        if self.__class__ is other.__class__:
            return self._order_key() < other._order_key()
        return NotImplemented

    def __le__(self, other):
        if self.__class__ is other.__class__:
            return self._order_key() <= other._order_key()
        return NotImplemented

    def __gt__(self, other):
        if self.__class__ is other.__class__:
            return self._order_key() > other._order_key()
        return NotImplemented

    def __ge__(self, other):
        if self.__class__ is other.__class__:
            return self._order_key() >= other._order_key()
        return NotImplemented


class Suit(_OrderedEnum):
    CLUB = "C"
    DIAMOND = "D"
    HEART = "H"
    SPADE = "S"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]

    def _order_key(self) -> int:
        return SUIT_ORDER[self]

    @classmethod
    def parse(cls, text: str) -> "Suit":
        """Parse a suit from its glyph (♣) or letter (C)."""
        suit = _SUIT_LOOKUP.get(text.strip().upper())
        if suit is None:
            raise MalformedCardError(text, "unrecognized suit")
        return suit

    def __str__(self) -> str:
        return self.symbol


class Rank(_OrderedEnum):
    """
    Card rank. The value is the ordinal (Ace=1 .. King=13) used for canonical
    ordering. For gameplay comparisons Ace ranks above King.
    """
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return RANK_LABELS[self]

    @property
    def strength(self) -> int:
        """Gameplay order, Ace high (2..14)."""
        return 14 if self is Rank.ACE else self.value

    def score(self) -> int:
        """Chips this rank adds when it is part of a scored hand."""
        return RANK_SCORES[self]

    def _order_key(self) -> int:
        return self.strength

    @classmethod
    def parse(cls, text: str) -> "Rank":
        """Parse a rank from a letter code (A, J, Q, K) or numeral (1..13)."""
        rank = _RANK_LOOKUP.get(text.strip().upper())
        if rank is None:
            raise MalformedCardError(text, "unrecognized rank")
        return rank

    def __str__(self) -> str:
        return self.label


SUIT_SYMBOLS = {
    Suit.CLUB: "♣",
    Suit.DIAMOND: "♦",
    Suit.HEART: "♥",
    Suit.SPADE: "♠",
}
SUIT_ORDER = {suit: i for i, suit in enumerate(Suit)}

RANK_LABELS = {
    Rank.ACE: "A", Rank.TWO: "2", Rank.THREE: "3", Rank.FOUR: "4",
    Rank.FIVE: "5", Rank.SIX: "6", Rank.SEVEN: "7", Rank.EIGHT: "8",
    Rank.NINE: "9", Rank.TEN: "10", Rank.JACK: "J", Rank.QUEEN: "Q",
    Rank.KING: "K",
}
RANK_SCORES = {
    rank: (10 if rank in (Rank.ACE, Rank.JACK, Rank.QUEEN, Rank.KING) else rank.value)
    for rank in Rank
}

_SUIT_LOOKUP = {}
for _suit in Suit:
    _SUIT_LOOKUP[_suit.value] = _suit
    _SUIT_LOOKUP[SUIT_SYMBOLS[_suit]] = _suit

_RANK_LOOKUP = {}
for _rank in Rank:
    _RANK_LOOKUP[str(_rank.value)] = _rank
    _RANK_LOOKUP[RANK_LABELS[_rank]] = _rank

# Emoji presentation selector, e.g. "♥️"
_VARIATION_SELECTOR = "\ufe0f"


@dataclass(frozen=True, order=True)
class Card:
    rank: Rank
    suit: Suit

    @property
    def chip_value(self) -> int:
        return self.rank.score()

    @classmethod
    def parse(cls, text: str) -> "Card":
        """
        Parse a card such as "10♣", "AS", "1H" or "13d".

        The last character is the suit, everything before it is the rank.
        """
        body = text.strip().rstrip(_VARIATION_SELECTOR)
        if len(body) < 2:
            raise MalformedCardError(text, "expected a rank followed by a suit")

        suit = _SUIT_LOOKUP.get(body[-1].upper())
        if suit is None:
            raise MalformedCardError(text, f"unrecognized suit {body[-1]!r}")
        rank = _RANK_LOOKUP.get(body[:-1].upper())
        if rank is None:
            raise MalformedCardError(text, f"unrecognized rank {body[:-1]!r}")
        return cls(rank=rank, suit=suit)

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.symbol}"

    def __repr__(self) -> str:
        return self.__str__()


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace/comma separated list of cards."""
    return [Card.parse(token) for token in re.split(r"[\s,]+", text.strip()) if token]


def sort_by_rank(cards: Iterable[Card]) -> list[Card]:
    """Descending rank (Ace high), then suit order."""
    return sorted(cards, key=lambda c: (-c.rank.strength, SUIT_ORDER[c.suit]))


def sort_by_suit(cards: Iterable[Card]) -> list[Card]:
    """Suit order, then descending rank."""
    return sorted(cards, key=lambda c: (SUIT_ORDER[c.suit], -c.rank.strength))


def grouped_by_rank(cards: Iterable[Card]) -> list[tuple[Rank, int]]:
    """(rank, count) pairs, most common first; ties keep first-seen order."""
    return Counter(c.rank for c in cards).most_common()


def grouped_by_suit(cards: Iterable[Card]) -> list[tuple[Suit, int]]:
    """(suit, count) pairs, most common first; ties keep first-seen order."""
    return Counter(c.suit for c in cards).most_common()


STANDARD_DECK = tuple(Card(rank=rank, suit=suit) for rank in Rank for suit in Suit)


@dataclass
class Deck:
    """
    Draw pile shared by a run and its rounds.

    All operations take the deck lock; if it cannot be acquired within
    `lock_timeout` seconds a DeckLockError is raised. Reads take the same
    exclusive lock as writes, so a count never sees a draw half done.
    """
    cards: list[Card] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    lock_timeout: float = 1.0
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False,
                                  repr=False, compare=False)

    @classmethod
    def standard(cls, seed=None) -> "Deck":
        """Create a standard 52-card deck in canonical order."""
        return cls(cards=list(STANDARD_DECK), rng=random.Random(seed))

    @contextmanager
    def _locked(self, operation: str) -> Iterator[list[Card]]:
        if not self._lock.acquire(timeout=self.lock_timeout):
            logger.error("Could not acquire deck lock for %s within %.2fs",
                         operation, self.lock_timeout)
            raise DeckLockError(f"Could not acquire lock on deck for {operation}")
        try:
            yield self.cards
        finally:
            self._lock.release()

    def shuffle(self) -> None:
        """Shuffle the deck in place."""
        with self._locked("shuffle") as cards:
            self.rng.shuffle(cards)

    def draw_random(self, n: int) -> list[Card]:
        """Shuffle, then remove and return n cards from the top of the deck."""
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {n}")
        with self._locked("draw") as cards:
            if n > len(cards):
                raise InsufficientCardsError(requested=n, available=len(cards))
            self.rng.shuffle(cards)
            drawn = cards[len(cards) - n:]
            del cards[len(cards) - n:]
            logger.debug("Drew %d cards, %d left in deck", n, len(cards))
        return drawn

    def add(self, cards: Iterable[Card]) -> None:
        """Return cards to the deck."""
        with self._locked("add") as deck_cards:
            deck_cards.extend(cards)

    def snapshot(self) -> list[Card]:
        """Copy of the current cards."""
        with self._locked("read") as cards:
            return list(cards)

    def count_by_suit(self, suit: Suit) -> int:
        with self._locked("read") as cards:
            return sum(1 for c in cards if c.suit == suit)

    def count_by_rank(self, rank: Rank) -> int:
        with self._locked("read") as cards:
            return sum(1 for c in cards if c.rank == rank)

    def __len__(self) -> int:
        with self._locked("read") as cards:
            return len(cards)


def validate_indices(indices: Iterable[int], size: int) -> list[int]:
    """Return sorted unique indices, rejecting anything outside [0, size)."""
    unique = set()
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < size:
            raise InvalidIndexError(index, size)
        unique.add(index)
    return sorted(unique)


class Hand:
    """Represents cards currently held in hand."""

    def __init__(self, cards: list[Card] = None):
        self.cards: list[Card] = cards or []

    def add(self, cards: Iterable[Card]) -> None:
        self.cards.extend(cards)

    def sort(self) -> None:
        self.cards = sort_by_rank(self.cards)

    def peek(self, indices: Iterable[int]) -> list[Card]:
        """Get cards at the given indices without removing them."""
        return [self.cards[i] for i in validate_indices(indices, len(self.cards))]

    def drain(self, indices: Iterable[int]) -> list[Card]:
        """Remove and return cards at the given indices."""
        selected = set(validate_indices(indices, len(self.cards)))
        drained = [c for i, c in enumerate(self.cards) if i in selected]
        self.cards = [c for i, c in enumerate(self.cards) if i not in selected]
        return drained

    def clear(self) -> list[Card]:
        """Remove and return all cards."""
        cards = self.cards
        self.cards = []
        return cards

    def size(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.__str__()})"
