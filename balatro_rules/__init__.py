"""
Balatro Rules Engine
"""

from .engine.deck import Card, Deck, Hand, Rank, Suit, parse_cards
from .engine.hand_detector import ScoringHand, DetectedHand, detect_hand, classify
from .engine.scoring import Scorer, ScoreBreakdown, calculate_score, score_breakdown
from .engine.blind import Blind, BossKind
from .engine.run import Run, RunProperties, RunState
from .engine.game import Game
from .engine.errors import BalatroError

__version__ = "0.1.0"
