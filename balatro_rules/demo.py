#!/usr/bin/env python3
"""
Console front-end for the rules engine.

    python -m balatro_rules.demo score "AS KS QS JS 10S"
    python -m balatro_rules.demo targets
    python -m balatro_rules.demo play --preset red_deck --seed abc
"""

import argparse
import logging
import sys

from .engine.blind import MAX_ANTE, Blind, BossKind
from .engine.deck import parse_cards
from .engine.errors import BalatroError
from .engine.game import Game
from .engine.scoring import score_breakdown
from .presets import build_properties, list_presets
from .utils import LOG_LEVELS, parse_log_level, setup_logger

logger = logging.getLogger("balatro_rules.demo")

HELP_TEXT = """Commands:
  p <i> [<i> ...]   play the cards at the given positions
  d <i> [<i> ...]   discard the cards at the given positions
  s <i> [<i> ...]   preview the score of the given positions
  n                 next round (after winning one)
  q                 quit"""


def demo_score(text: str) -> int:
    cards = parse_cards(text)
    breakdown = score_breakdown(cards)

    print(f"\nPlayed: {', '.join(str(c) for c in cards)}")
    print(f"Detected: {breakdown.hand}")
    print(f"\nScoring breakdown:")
    print(f"  Base chips: {breakdown.base_chips}")
    print(f"  Rank chips: {breakdown.rank_chips} ({', '.join(str(r) for r in breakdown.scored_ranks)})")
    print(f"  Total chips: {breakdown.chips}")
    print(f"  Mult: {breakdown.multiplier}")
    print(f"\n  FINAL SCORE: {breakdown.score}")
    return 0


def demo_targets() -> int:
    print("=" * 60)
    print("BLIND TARGETS")
    print("=" * 60)
    blinds = [Blind.small(), Blind.big(), Blind.boss_blind(BossKind.HOOK),
              Blind.boss_blind(BossKind.WALL), Blind.boss_blind(BossKind.NEEDLE)]
    header = f"{'Ante':<6}" + "".join(f"{str(b.boss or b.name):>14}" for b in blinds)
    print(header)
    for ante in range(1, MAX_ANTE + 1):
        print(f"{ante:<6}" + "".join(f"{b.target_score(ante):>14}" for b in blinds))
    return 0


def _print_state(game: Game):
    print("\n" + "=" * 60)
    print(f"Ante {game.ante} - Round {game.round_number} - {game.blind}")
    print(f"  Score: {game.score}/{game.target_score}   Money: ${game.money}")
    print(f"  Hands: {game.hands_remaining}   Discards: {game.discards_remaining}"
          f"   Deck: {game.deck_size}")
    print("  Hand: " + "  ".join(f"[{i}] {c}" for i, c in enumerate(game.hand)))


def _parse_positions(args: list[str]) -> list[int]:
    try:
        return [int(a) for a in args]
    except ValueError:
        raise ValueError(f"Positions must be numbers, got {' '.join(args)!r}")


def demo_play(game: Game, auto: bool = False) -> int:
    game.start_run()
    while not game.is_over:
        _print_state(game)
        if game.round_won:
            print("\nRound won!")
            command = ["n"] if auto else input("> ").split()
        else:
            command = ["p", "0", "1", "2", "3", "4"] if auto else input("> ").split()
        if not command:
            continue

        action, args = command[0].lower(), command[1:]
        try:
            if action == "q":
                return 0
            elif action == "n":
                game.next_round()
            elif action == "p":
                game.select_for_play(_parse_positions(args))
                breakdown = game.play_hand()
                if breakdown:
                    print(f"  {breakdown.describe()}")
            elif action == "d":
                game.select_for_discard(_parse_positions(args))
                discarded = game.discard_hand()
                print(f"  Discarded {', '.join(str(c) for c in discarded)}")
            elif action == "s":
                game.select_for_play(_parse_positions(args))
                breakdown = game.preview()
                game.selection.clear()
                if breakdown:
                    print(f"  {breakdown.describe()}")
            else:
                print(HELP_TEXT)
        except (BalatroError, ValueError) as e:
            if auto:
                raise
            print(f"  Error: {e}")

    print(f"\nRun Result: {'VICTORY!' if game.won else 'DEFEAT'}")
    print(f"  Made it to: Ante {game.ante}, {game.blind}")
    print(f"  Final money: ${game.money}")
    print(f"  Seed: {game.properties.seed}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Balatro rules engine demo")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS,
                        type=str.upper, help="Logging verbosity")
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Classify and score a set of cards")
    score.add_argument("cards", help='Cards such as "AS KS QS JS 10S"')

    sub.add_parser("targets", help="Print the target score table")

    play = sub.add_parser("play", help="Play a run in the console")
    play.add_argument("--preset", default="standard", choices=list_presets())
    play.add_argument("--seed", default=None, help="Run seed (random if omitted)")
    play.add_argument("--auto", action="store_true",
                      help="Always play the five highest cards")
    return parser


def main(argv: list[str] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=parse_log_level(args.log_level))

    try:
        if args.command == "score":
            return demo_score(args.cards)
        if args.command == "targets":
            return demo_targets()
        properties = build_properties(args.preset, seed=args.seed)
        return demo_play(Game(properties, preset_name=args.preset), auto=args.auto)
    except BalatroError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
