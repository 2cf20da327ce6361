#!/usr/bin/env python3
"""
Print Elo outcomes for a set of match-ups.

Without arguments a fixed list of scenarios is printed (equal ratings,
upsets, new vs experienced players, elite players). With --winner and
--loser a single match-up is calculated.

Usage:
    python scripts/elo_table.py
    python scripts/elo_table.py --winner 1400 --loser 1800
    python scripts/elo_table.py --winner 1500 --loser 1500 --winner-matches 5
"""

import argparse
import logging

from tennismeet.config import configure_logging
from tennismeet.elo import (
    calculate_elo_change,
    calculate_win_probability,
    format_elo_change,
    get_elo_description,
    get_k_factor,
)

logger = logging.getLogger(__name__)

# (label, winner rating, loser rating, winner matches, loser matches)
SCENARIOS = [
    ("Equal ratings", 1500, 1500, 30, 30),
    ("Underdog victory", 1400, 1800, 30, 30),
    ("Favourite victory", 1800, 1400, 30, 30),
    ("New player wins", 1500, 1500, 10, 100),
    ("Experienced player wins", 1500, 1500, 100, 100),
    ("Elite players", 2500, 2400, 100, 100),
    ("Extreme upset", 1100, 2200, 20, 150),
]


def print_scenario(
    label: str,
    winner: float,
    loser: float,
    winner_matches: int,
    loser_matches: int,
) -> None:
    result = calculate_elo_change(winner, loser, winner_matches, loser_matches)
    probability = calculate_win_probability(winner, loser)

    print(f"\n{label}: {winner:g} beats {loser:g}")
    print("-" * 60)
    print(
        f"Winner: {winner:g} -> {result.winner.new_elo} "
        f"({format_elo_change(result.winner.change)}, K={get_k_factor(winner, winner_matches)})"
    )
    print(
        f"Loser:  {loser:g} -> {result.loser.new_elo} "
        f"({format_elo_change(result.loser.change)}, K={get_k_factor(loser, loser_matches)})"
    )
    print(f"Pre-match win probability: {probability * 100:.1f}%")
    print(
        f"{get_elo_description(result.winner.new_elo)} vs "
        f"{get_elo_description(result.loser.new_elo)}"
    )
    if result.was_upset:
        print("Upset!")


def main() -> None:
    parser = argparse.ArgumentParser(description="Print Elo outcomes for match-ups")
    parser.add_argument("--winner", type=float, help="Winner's rating before the match")
    parser.add_argument("--loser", type=float, help="Loser's rating before the match")
    parser.add_argument("--winner-matches", type=int, default=30, help="Winner's completed matches")
    parser.add_argument("--loser-matches", type=int, default=30, help="Loser's completed matches")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    configure_logging(args.log_level)

    if (args.winner is None) != (args.loser is None):
        parser.error("--winner and --loser must be given together")

    print("TennisMeet Elo table")
    print("=" * 60)

    if args.winner is not None:
        print_scenario("Custom", args.winner, args.loser, args.winner_matches, args.loser_matches)
        return

    for scenario in SCENARIOS:
        print_scenario(*scenario)
    logger.debug("Printed %d scenarios", len(SCENARIOS))


if __name__ == "__main__":
    main()
