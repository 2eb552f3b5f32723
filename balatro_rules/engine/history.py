"""
Run history tracking.
Captures key events of a run in order, for summaries and the UI log.
"""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass
class RunEvent:
    """Single event in a run."""
    ante: int
    blind: Optional[str]
    event_type: str  # "run_start", "round_start", "hand_played", "discard", ...
    data: dict
    sequence: int = 0


class RunHistory:
    """Ordered log of what happened during a run."""

    def __init__(self, seed: str = "", preset_name: str = "standard"):
        self.events: list[RunEvent] = []
        self.metadata = {
            "seed": seed,
            "preset": preset_name,
        }
        self._event_counter = 0

    def add_event(self, ante: int, event_type: str, data: dict, blind: str = None):
        """Add an event to the history."""
        self.events.append(RunEvent(
            ante=ante,
            blind=blind,
            event_type=event_type,
            data=data,
            sequence=self._event_counter
        ))
        self._event_counter += 1

    def add_run_start(self, money: int, hand_size: int, max_hands: int, max_discards: int):
        self.add_event(
            ante=1,
            event_type="run_start",
            data={
                "starting_money": money,
                "hand_size": hand_size,
                "max_hands": max_hands,
                "max_discards": max_discards,
            }
        )

    def add_round_start(self, ante: int, blind: str, round_number: int, target: int):
        self.add_event(
            ante=ante,
            blind=blind,
            event_type="round_start",
            data={"round_number": round_number, "target": target}
        )

    def add_hand_played(self, ante: int, blind: str, hand: str, cards: list,
                        score: int, total: int):
        self.add_event(
            ante=ante,
            blind=blind,
            event_type="hand_played",
            data={"hand": hand, "cards": cards, "score": score, "total": total}
        )

    def add_discard(self, ante: int, blind: str, cards: list):
        self.add_event(
            ante=ante,
            blind=blind,
            event_type="discard",
            data={"cards": cards}
        )

    def add_round_result(self, ante: int, blind: str, score: int, required: int,
                         success: bool, hands_used: int, discards_used: int,
                         reward: int = 0):
        """Log a finished round."""
        margin = score - required
        margin_pct = (margin / required * 100) if required > 0 else 0

        self.add_event(
            ante=ante,
            blind=blind,
            event_type="round_result",
            data={
                "score": score,
                "required": required,
                "success": success,
                "margin": margin,
                "margin_pct": round(margin_pct, 1),
                "hands_used": hands_used,
                "discards_used": discards_used,
                "reward": reward,
            }
        )

    def add_run_end(self, success: bool, final_ante: int, final_blind: str,
                    rounds_won: int, final_money: int):
        self.add_event(
            ante=final_ante,
            blind=final_blind,
            event_type="run_end",
            data={
                "victory": success,
                "rounds_won": rounds_won,
                "final_money": final_money,
            }
        )

    def round_results(self) -> list[RunEvent]:
        return [e for e in self.events if e.event_type == "round_result"]

    def best_hand(self) -> Optional[RunEvent]:
        """Highest scoring hand played so far, earliest wins ties."""
        played = [e for e in self.events if e.event_type == "hand_played"]
        if not played:
            return None
        return max(played, key=lambda e: (e.data["score"], -e.sequence))

    def to_dict(self) -> dict:
        """Convert to a plain dict."""
        return {
            "metadata": self.metadata,
            "events": [asdict(e) for e in self.events],
            "summary": self._generate_summary()
        }

    def _generate_summary(self) -> dict:
        results = self.round_results()
        run_end = next((e for e in self.events if e.event_type == "run_end"), None)
        best = self.best_hand()

        return {
            "rounds_played": len(results),
            "rounds_won": sum(1 for e in results if e.data.get("success")),
            "hands_played": sum(1 for e in self.events if e.event_type == "hand_played"),
            "discards": sum(1 for e in self.events if e.event_type == "discard"),
            "best_hand": best.data["hand"] if best else None,
            "best_score": best.data["score"] if best else 0,
            "victory": run_end.data.get("victory") if run_end else False
        }

    def __len__(self) -> int:
        return len(self.events)
