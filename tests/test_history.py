"""Tests for the run history log."""

from balatro_rules.engine.history import RunHistory


def sample_history():
    history = RunHistory(seed="abc", preset_name="red_deck")
    history.add_run_start(money=10, hand_size=10, max_hands=3, max_discards=4)
    history.add_round_start(ante=1, blind="Small Blind", round_number=1, target=300)
    history.add_hand_played(ante=1, blind="Small Blind", hand="Pair", cards=["K♥", "K♦"],
                            score=60, total=60)
    history.add_discard(ante=1, blind="Small Blind", cards=["2♣"])
    history.add_hand_played(ante=1, blind="Small Blind", hand="Flush", cards=[],
                            score=240, total=300)
    history.add_round_result(ante=1, blind="Small Blind", score=300, required=300,
                             success=True, hands_used=2, discards_used=1, reward=3)
    return history


class TestRunHistory:
    def test_events_are_ordered(self):
        history = sample_history()
        assert [e.sequence for e in history.events] == list(range(6))
        assert len(history) == 6

    def test_round_results(self):
        results = sample_history().round_results()
        assert len(results) == 1
        assert results[0].data["margin"] == 0
        assert results[0].data["success"] is True

    def test_best_hand(self):
        best = sample_history().best_hand()
        assert best.data["hand"] == "Flush"
        assert RunHistory().best_hand() is None

    def test_best_hand_ties_keep_first(self):
        history = RunHistory()
        history.add_hand_played(ante=1, blind="Small Blind", hand="Pair", cards=[], score=60, total=60)
        history.add_hand_played(ante=1, blind="Small Blind", hand="Pair", cards=[], score=60, total=120)
        assert history.best_hand().sequence == 0

    def test_to_dict(self):
        data = sample_history().to_dict()
        assert data["metadata"] == {"seed": "abc", "preset": "red_deck"}
        assert len(data["events"]) == 6
        assert data["events"][0]["event_type"] == "run_start"
        summary = data["summary"]
        assert summary["rounds_played"] == 1
        assert summary["rounds_won"] == 1
        assert summary["hands_played"] == 2
        assert summary["discards"] == 1
        assert summary["best_hand"] == "Flush"
        assert summary["best_score"] == 240
        assert summary["victory"] is False
