"""Tests for the round state machine.

Test coverage:
- Dealing the opening hand
- Playing and discarding, with replacement draws
- Failed actions leave the round untouched
- Won / Lost evaluation
"""

import pytest
from balatro_rules.engine.blind import Blind, BossKind
from balatro_rules.engine.deck import Deck, Hand, parse_cards, sort_by_rank
from balatro_rules.engine.errors import (
    DiscardsExhaustedError,
    HandsExhaustedError,
    InsufficientCardsError,
    InvalidIndexError,
    RoundStateError,
    SelectionLimitError,
)
from balatro_rules.engine.hand_detector import ScoringHand
from balatro_rules.engine.round import Round, RoundProperties, RoundState

ROYAL_HAND = "AS KS QS JS 10S 9D 7C 4H 3C 2D"


def make_round(hand_text=None, hands=3, discards=3, blind=None, ante=1):
    deck = Deck.standard(seed="round")
    rnd = Round(RoundProperties(ante=ante, hand_size=10, round_number=1),
                blind or Blind.small(), hands, discards)
    rnd.start(deck)
    if hand_text:
        rnd.hand = Hand(parse_cards(hand_text))
        rnd.hand.sort()
    return rnd, deck


def snapshot(rnd, deck):
    return (rnd.score, rnd.hands_remaining, rnd.discards_remaining,
            list(rnd.hand), list(rnd.history), rnd.state, deck.snapshot())


class TestRoundProperties:
    def test_valid(self):
        props = RoundProperties(ante=8, hand_size=10, round_number=24)
        assert props.ante == 8

    @pytest.mark.parametrize("ante", [0, 9])
    def test_ante_range(self, ante):
        with pytest.raises(ValueError):
            RoundProperties(ante=ante, hand_size=10, round_number=1)

    def test_round_number_positive(self):
        with pytest.raises(ValueError):
            RoundProperties(ante=1, hand_size=10, round_number=0)


class TestStart:
    def test_deals_sorted_hand(self):
        rnd, deck = make_round()
        assert rnd.state is RoundState.IN_PROGRESS
        assert len(rnd.hand) == 10
        assert list(rnd.hand) == sort_by_rank(rnd.hand)
        assert len(deck) == 42

    def test_cannot_start_twice(self):
        rnd, deck = make_round()
        with pytest.raises(RoundStateError):
            rnd.start(deck)

    def test_not_enough_cards(self):
        rnd = Round(RoundProperties(ante=1, hand_size=10, round_number=1), Blind.small(), 3, 3)
        deck = Deck(cards=parse_cards("AS KS"))
        with pytest.raises(InsufficientCardsError):
            rnd.start(deck)
        assert rnd.state is RoundState.NOT_STARTED
        assert len(deck) == 2

    def test_queries(self):
        rnd, _ = make_round(blind=Blind.boss_blind(BossKind.WALL), ante=2)
        assert rnd.target_score == 3200
        assert rnd.reward == 5
        assert rnd.hands_played == 0
        assert rnd.discards_used == 0


class TestPlayHand:
    def test_play_scores_and_redeals(self):
        rnd, deck = make_round(ROYAL_HAND)
        breakdown = rnd.play_hand(deck, [0, 1, 2, 3, 4])
        assert breakdown.hand is ScoringHand.ROYAL_FLUSH
        assert rnd.score == 1200
        assert rnd.hands_remaining == 2
        assert rnd.hands_played == 1
        assert len(rnd.hand) == 10
        assert rnd.history == parse_cards("AS KS QS JS 10S")
        assert list(rnd.hand) == sort_by_rank(rnd.hand)
        assert len(deck) == 37

    def test_empty_selection_is_noop(self):
        rnd, deck = make_round(ROYAL_HAND)
        before = snapshot(rnd, deck)
        assert rnd.play_hand(deck, []) is None
        assert snapshot(rnd, deck) == before

    def test_hands_exhausted_leaves_state(self):
        rnd, deck = make_round(ROYAL_HAND)
        rnd.hands_remaining = 0
        before = snapshot(rnd, deck)
        with pytest.raises(HandsExhaustedError):
            rnd.play_hand(deck, [0])
        assert snapshot(rnd, deck) == before

    def test_bad_index_leaves_state(self):
        rnd, deck = make_round(ROYAL_HAND)
        before = snapshot(rnd, deck)
        with pytest.raises(InvalidIndexError):
            rnd.play_hand(deck, [0, 10])
        assert snapshot(rnd, deck) == before

    def test_six_cards_rejected_and_state_kept(self):
        rnd, deck = make_round("AS KS QS JS 10S 9S 7C 4H 3C 2D")
        before = snapshot(rnd, deck)
        with pytest.raises(SelectionLimitError) as exc:
            rnd.play_hand(deck, [0, 1, 2, 3, 4, 5])
        assert exc.value.attempted == 6
        assert exc.value.limit == 5
        assert snapshot(rnd, deck) == before

    def test_repeated_index_counts_once(self):
        rnd, deck = make_round(ROYAL_HAND)
        breakdown = rnd.play_hand(deck, [0, 0, 1, 2, 3, 4])
        assert breakdown.hand is ScoringHand.ROYAL_FLUSH

    def test_empty_deck_leaves_state(self):
        rnd, deck = make_round(ROYAL_HAND)
        before = snapshot(rnd, deck)
        with pytest.raises(InsufficientCardsError):
            rnd.play_hand(Deck(), [0, 1])
        assert snapshot(rnd, deck) == before

    def test_not_started(self):
        rnd = Round(RoundProperties(ante=1, hand_size=10, round_number=1), Blind.small(), 3, 3)
        with pytest.raises(RoundStateError):
            rnd.play_hand(Deck.standard(), [0])

    def test_finished_round(self):
        rnd, deck = make_round(ROYAL_HAND)
        rnd.play_hand(deck, [0, 1, 2, 3, 4])
        assert rnd.evaluate() is RoundState.WON
        with pytest.raises(RoundStateError):
            rnd.play_hand(deck, [0])
        with pytest.raises(RoundStateError):
            rnd.discard_hand(deck, [0])


class TestDiscard:
    def test_discard_redeals(self):
        rnd, deck = make_round(ROYAL_HAND)
        discarded = rnd.discard_hand(deck, [8, 9])
        assert discarded == parse_cards("3C 2D")
        assert rnd.discards_remaining == 2
        assert rnd.discards_used == 1
        assert rnd.score == 0
        assert len(rnd.hand) == 10
        assert rnd.history == discarded
        assert len(deck) == 40

    def test_empty_discard_is_noop(self):
        rnd, deck = make_round()
        assert rnd.discard_hand(deck, []) == []
        assert rnd.discards_remaining == 3

    def test_discard_over_limit_leaves_state(self):
        rnd, deck = make_round(ROYAL_HAND)
        before = snapshot(rnd, deck)
        with pytest.raises(SelectionLimitError):
            rnd.discard_hand(deck, range(6))
        assert snapshot(rnd, deck) == before

    def test_discards_exhausted_leaves_state(self):
        rnd, deck = make_round(discards=0)
        before = snapshot(rnd, deck)
        with pytest.raises(DiscardsExhaustedError):
            rnd.discard_hand(deck, [0])
        assert snapshot(rnd, deck) == before


class TestEvaluate:
    def test_in_progress(self):
        rnd, deck = make_round(ROYAL_HAND)
        rnd.play_hand(deck, [9])
        assert rnd.evaluate() is RoundState.IN_PROGRESS

    def test_won_when_target_reached(self):
        rnd, deck = make_round(ROYAL_HAND)
        rnd.play_hand(deck, [0, 1, 2, 3, 4])
        assert rnd.score >= rnd.target_score
        assert rnd.evaluate() is RoundState.WON

    def test_lost_when_out_of_hands(self):
        rnd, deck = make_round(ROYAL_HAND, hands=1)
        rnd.play_hand(deck, [9])
        assert rnd.score == (5 + 2) * 1
        assert rnd.evaluate() is RoundState.LOST

    def test_win_on_last_hand_beats_loss(self):
        rnd, deck = make_round(ROYAL_HAND, hands=1)
        rnd.play_hand(deck, [0, 1, 2, 3, 4])
        assert rnd.hands_remaining == 0
        assert rnd.evaluate() is RoundState.WON


class TestPreviewAndCollect:
    def test_preview_does_not_mutate(self):
        rnd, deck = make_round(ROYAL_HAND)
        before = snapshot(rnd, deck)
        assert rnd.preview([0, 1, 2, 3, 4]).score == 1200
        assert rnd.preview([]) is None
        assert snapshot(rnd, deck) == before

    def test_collect_cards(self):
        rnd, deck = make_round()
        rnd.play_hand(deck, [0, 1, 2])
        cards = rnd.collect_cards()
        assert len(cards) == 13
        assert len(rnd.hand) == 0
        assert rnd.history == []
