"""
Blinds for a run: Small, Big and Boss.
Each ante has a pool of possible bosses; boss effects are descriptive only.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import AnteExceededError

CHIPS_MULTIPLIER = 25
BASE_AMOUNTS = [3, 8, 20, 50, 110, 200, 350, 500]
MAX_ANTE = len(BASE_AMOUNTS)
BLINDS_PER_ANTE = 3


class BlindType(Enum):
    SMALL = "Small Blind"
    BIG = "Big Blind"
    BOSS = "Boss Blind"


@dataclass(frozen=True)
class BlindProperties:
    score_multiplier: int
    color: str
    reward: int


BLIND_PROPERTIES = {
    BlindType.SMALL: BlindProperties(score_multiplier=2, color="blue", reward=3),
    BlindType.BIG: BlindProperties(score_multiplier=3, color="green", reward=4),
    BlindType.BOSS: BlindProperties(score_multiplier=4, color="red", reward=5),
}


class BossKind(Enum):
    """Boss blinds as (display name, minimum ante, description)."""
    HOOK = ("The Hook", 1, "Discards 2 random cards per hand played")
    OX = ("The Ox", 1, "Playing your most played hand sets money to $0")
    HOUSE = ("The House", 1, "First hand is drawn face down")
    WALL = ("The Wall", 2, "Extra large blind")
    WHEEL = ("The Wheel", 2, "1 in 7 cards get drawn face down")
    ARM = ("The Arm", 2, "Decrease level of played hand")
    CLUB = ("The Club", 3, "All Club cards are debuffed")
    FISH = ("The Fish", 3, "Cards drawn face down after each hand played")
    PSYCHIC = ("The Psychic", 3, "Must play 5 cards")
    GOAD = ("The Goad", 4, "All Spade cards are debuffed")
    WATER = ("The Water", 4, "Start with 0 discards")
    WINDOW = ("The Window", 4, "All Diamond cards are debuffed")
    MANACLE = ("The Manacle", 5, "-1 hand size")
    EYE = ("The Eye", 5, "No repeat hand types this round")
    MOUTH = ("The Mouth", 5, "Play only 1 hand type this round")
    PLANT = ("The Plant", 6, "All face cards are debuffed")
    SERPENT = ("The Serpent", 6, "Always draw 3 cards after play or discard")
    PILLAR = ("The Pillar", 6, "Cards played previously this ante are debuffed")
    NEEDLE = ("The Needle", 7, "Play only 1 hand")
    HEAD = ("The Head", 7, "All Heart cards are debuffed")
    TOOTH = ("The Tooth", 7, "Lose $1 per card played")
    FLINT = ("The Flint", 8, "Base Chips and Mult are halved")
    MARK = ("The Mark", 8, "All face cards are drawn face down")

    def __init__(self, display_name: str, min_ante: int, description: str):
        self.display_name = display_name
        self.min_ante = min_ante
        self.description = description

    @classmethod
    def parse(cls, text: str) -> "BossKind":
        """Look up a boss by name, with or without the leading "The"."""
        wanted = text.strip().lower()
        if not wanted.startswith("the "):
            wanted = "the " + wanted
        for kind in cls:
            if kind.display_name.lower() == wanted:
                return kind
        raise ValueError(f"Unknown boss: {text!r}")

    def __str__(self) -> str:
        return self.display_name


# Everything not listed uses the default boss multiplier of 2
BOSS_MULTIPLIER_OVERRIDES = {
    BossKind.WALL: 4,
    BossKind.NEEDLE: 1,
}
DEFAULT_BOSS_MULTIPLIER = 2


@dataclass(frozen=True)
class Blind:
    """A blind faced in a round. `boss` is set only for Boss blinds."""
    kind: BlindType
    boss: Optional[BossKind] = None

    def __post_init__(self):
        if (self.kind is BlindType.BOSS) != (self.boss is not None):
            raise ValueError("A boss kind is required for, and only for, Boss blinds")

    @classmethod
    def small(cls) -> "Blind":
        return cls(BlindType.SMALL)

    @classmethod
    def big(cls) -> "Blind":
        return cls(BlindType.BIG)

    @classmethod
    def boss_blind(cls, boss: BossKind) -> "Blind":
        return cls(BlindType.BOSS, boss)

    @property
    def is_boss(self) -> bool:
        return self.kind is BlindType.BOSS

    @property
    def score_multiplier(self) -> int:
        return BLIND_PROPERTIES[self.kind].score_multiplier

    @property
    def boss_multiplier(self) -> int:
        return BOSS_MULTIPLIER_OVERRIDES.get(self.boss, DEFAULT_BOSS_MULTIPLIER)

    @property
    def color(self) -> str:
        return BLIND_PROPERTIES[self.kind].color

    @property
    def reward(self) -> int:
        return BLIND_PROPERTIES[self.kind].reward

    @property
    def name(self) -> str:
        return self.kind.value

    def target_score(self, ante: int) -> int:
        """Score needed to beat this blind at the given ante (1..8)."""
        return target_score(self, ante)

    def __str__(self) -> str:
        if self.boss is not None:
            return f"{self.kind.value} ({self.boss})"
        return self.kind.value


def target_score(blind: Blind, ante: int) -> int:
    if ante < 1:
        raise ValueError(f"Ante must be at least 1, got {ante}")
    if ante > MAX_ANTE:
        raise AnteExceededError(ante)
    return (CHIPS_MULTIPLIER * blind.score_multiplier * blind.boss_multiplier
            * BASE_AMOUNTS[ante - 1])


def random_boss(ante: int, rng: random.Random = None) -> BossKind:
    """Get a random boss appropriate for the given ante."""
    rng = rng or random.Random()
    eligible = [b for b in BossKind if b.min_ante <= ante]

    # Weight toward bosses matching current ante
    weights = []
    for boss in eligible:
        if boss.min_ante == ante:
            weights.append(3)
        elif boss.min_ante == ante - 1:
            weights.append(2)
        else:
            weights.append(1)

    return rng.choices(eligible, weights=weights, k=1)[0]


def ante_for_round(round_number: int) -> int:
    return (round_number - 1) // BLINDS_PER_ANTE + 1


def blind_for_round(round_number: int, rng: random.Random = None) -> Blind:
    """Small, Big, then Boss for each ante."""
    if round_number < 1:
        raise ValueError(f"Round number must be at least 1, got {round_number}")
    position = (round_number - 1) % BLINDS_PER_ANTE
    if position == 0:
        return Blind.small()
    if position == 1:
        return Blind.big()
    return Blind.boss_blind(random_boss(ante_for_round(round_number), rng))
