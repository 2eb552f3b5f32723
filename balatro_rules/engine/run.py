"""
A full run: eight antes of Small, Big and Boss blinds.
The run owns the deck and hands it to the current round for every action.
"""

import logging
import random
import string
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional

from .blind import MAX_ANTE, Blind, ante_for_round, blind_for_round
from .deck import Card, Deck
from .errors import RoundStateError
from .history import RunHistory
from .round import Round, RoundProperties, RoundState
from .scoring import ScoreBreakdown

logger = logging.getLogger(__name__)

SEED_LENGTH = 16


def random_seed() -> str:
    """Random alphanumeric run seed."""
    return "".join(random.choices(string.ascii_letters + string.digits, k=SEED_LENGTH))


@dataclass(frozen=True)
class RunProperties:
    """Configuration for a run."""
    hand_size: int = 10
    max_hands: int = 3
    max_discards: int = 3
    seed: str = field(default_factory=random_seed)
    starting_money: int = 10

    def __post_init__(self):
        if self.hand_size < 1:
            raise ValueError(f"Hand size must be positive, got {self.hand_size}")
        if self.max_hands < 1:
            raise ValueError(f"A run needs at least one hand, got {self.max_hands}")
        if self.max_discards < 0 or self.starting_money < 0:
            raise ValueError("Discards and starting money cannot be negative")


class RunState(Enum):
    RUNNING = auto()
    WON = auto()
    LOST = auto()

    @property
    def finished(self) -> bool:
        return self is not RunState.RUNNING


class Run:
    """Tracks the state of a run across rounds."""

    def __init__(self, properties: RunProperties = None, preset_name: str = "standard"):
        self.properties = properties or RunProperties()
        self.state = RunState.RUNNING
        self.money = self.properties.starting_money
        self.deck = Deck.standard(seed=self.properties.seed)
        # Boss picks draw from their own stream, independent of the deck
        self._blind_rng = random.Random(f"{self.properties.seed}:blinds")
        self.history = RunHistory(seed=self.properties.seed, preset_name=preset_name)
        self.rounds_won = 0
        self.started = False

        self.round = self._build_round(1)
        self.upcoming_round_number = 2

    @classmethod
    def new(cls, properties: RunProperties = None, preset_name: str = "standard") -> "Run":
        return cls(properties, preset_name=preset_name)

    @property
    def ante(self) -> int:
        return self.round.properties.ante

    @property
    def round_number(self) -> int:
        return self.round.properties.round_number

    @property
    def blind(self) -> Blind:
        return self.round.blind

    def _build_round(self, round_number: int) -> Round:
        properties = RoundProperties(
            ante=ante_for_round(round_number),
            hand_size=self.properties.hand_size,
            round_number=round_number,
        )
        return Round(
            properties=properties,
            blind=blind_for_round(round_number, self._blind_rng),
            max_hands=self.properties.max_hands,
            max_discards=self.properties.max_discards,
        )

    def _require_running(self, action: str):
        if self.state.finished:
            raise RoundStateError(f"Cannot {action}, run is over ({self.state.name})")

    def _start_round(self):
        self.round.start(self.deck)
        self.history.add_round_start(
            ante=self.ante,
            blind=str(self.blind),
            round_number=self.round_number,
            target=self.round.target_score,
        )
        logger.info("Round %d (ante %d): %s, target %d",
                    self.round_number, self.ante, self.blind, self.round.target_score)

    def start(self) -> None:
        """Deal the first round."""
        self._require_running("start")
        if self.started:
            raise RoundStateError("Run already started")
        self.history.add_run_start(
            money=self.money,
            hand_size=self.properties.hand_size,
            max_hands=self.properties.max_hands,
            max_discards=self.properties.max_discards,
        )
        self._start_round()
        self.started = True

    def play_hand(self, indices: Iterable[int]) -> Optional[ScoreBreakdown]:
        self._require_running("play a hand")
        seen = len(self.round.history)
        breakdown = self.round.play_hand(self.deck, indices)
        if breakdown is None:
            return None

        self.history.add_hand_played(
            ante=self.ante,
            blind=str(self.blind),
            hand=str(breakdown.hand),
            cards=[str(c) for c in self.round.history[seen:]],
            score=breakdown.score,
            total=self.round.score,
        )
        self._settle_round()
        return breakdown

    def discard_hand(self, indices: Iterable[int]) -> list[Card]:
        self._require_running("discard")
        discarded = self.round.discard_hand(self.deck, indices)
        if not discarded:
            return discarded

        self.history.add_discard(
            ante=self.ante,
            blind=str(self.blind),
            cards=[str(c) for c in discarded],
        )
        self._settle_round()
        return discarded

    def _settle_round(self):
        state = self.round.evaluate()
        if not state.finished:
            return

        won = state is RoundState.WON
        reward = self.round.reward if won else 0
        self.history.add_round_result(
            ante=self.ante,
            blind=str(self.blind),
            score=self.round.score,
            required=self.round.target_score,
            success=won,
            hands_used=self.round.hands_played,
            discards_used=self.round.discards_used,
            reward=reward,
        )

        if won:
            self.money += reward
            self.rounds_won += 1
            if self.blind.is_boss and self.ante == MAX_ANTE:
                self._finish(RunState.WON)
        else:
            self._finish(RunState.LOST)

    def _finish(self, state: RunState):
        self.state = state
        self.history.add_run_end(
            success=state is RunState.WON,
            final_ante=self.ante,
            final_blind=str(self.blind),
            rounds_won=self.rounds_won,
            final_money=self.money,
        )
        logger.info("Run %s at ante %d with $%d", state.name.lower(), self.ante, self.money)

    def next_round(self) -> Round:
        """Move on after a won round: return all cards to the deck and deal the next blind."""
        self._require_running("advance")
        if self.round.state is not RoundState.WON:
            raise RoundStateError(
                f"Cannot advance from a round that is {self.round.state.name}"
            )

        self.deck.add(self.round.collect_cards())
        self.round = self._build_round(self.upcoming_round_number)
        self.upcoming_round_number += 1
        self._start_round()
        return self.round

    def __repr__(self) -> str:
        return (f"Run(state={self.state.name}, ante={self.ante}, "
                f"round={self.round_number}, money={self.money})")
