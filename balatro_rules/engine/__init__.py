"""
Balatro rules engine components.
"""

from .errors import (BalatroError, ArithmeticOverflowError, ResourceExhaustedError,
                     InsufficientCardsError, HandsExhaustedError, DiscardsExhaustedError,
                     InvalidInputError, MalformedCardError, InvalidIndexError,
                     SelectionLimitError, AnteExceededError, EmptyHandError,
                     DeckLockError, RoundStateError)
from .deck import Card, Deck, Hand, Rank, Suit, parse_cards, sort_by_rank, sort_by_suit
from .hand_detector import ScoringHand, DetectedHand, HAND_BASE_VALUES, detect_hand, classify
from .scoring import MAX_SCORE, Scorer, ScoreBreakdown, calculate_score, score_breakdown
from .blind import Blind, BlindType, BossKind, target_score
from .selection import CardSelection, MAXIMUM_SELECTABLE_CARDS
from .history import RunEvent, RunHistory
from .round import Round, RoundProperties, RoundState
from .run import Run, RunProperties, RunState
from .game import Game
