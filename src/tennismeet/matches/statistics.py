"""
Match statistics for a single player.

Aggregates a player's completed matches into win/loss totals, per-surface
records, recent form and streaks. Streaks are scanned oldest to newest so
the "current" streak is the run that includes the most recent match.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from tennismeet.matches.models import (
    Match,
    MatchStatistics,
    MatchStatus,
    StreakType,
    Surface,
    SurfaceRecord,
)

logger = logging.getLogger(__name__)

RECENT_FORM_LENGTH = 10


def round_one_decimal(value: float) -> float:
    """Round to one decimal place, ties away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int) -> float:
    """Percentage rounded to one decimal, 0.0 when ``whole`` is zero."""
    if whole == 0:
        return 0.0
    return round_one_decimal(part / whole * 100)


def _chronological_key(match: Match):
    # Matches without a completion date sort as the oldest
    return (match.completed_date is not None, match.completed_date or match.created_at)


def calculate_match_statistics(
    matches: Iterable[Match],
    player_id: str,
) -> MatchStatistics:
    """
    Calculate a player's record from their completed matches.

    Only completed matches with a score in which the player took part are
    counted. An empty history returns a zero-valued MatchStatistics.

    Args:
        matches: Any collection of matches (other players' are ignored)
        player_id: Player to compute statistics for

    Returns:
        MatchStatistics with totals, per-surface records, recent form
        (newest first) and streaks
    """
    player_matches = [
        m for m in matches
        if m.involves(player_id)
        and m.status == MatchStatus.COMPLETED
        and m.score is not None
    ]

    if not player_matches:
        return MatchStatistics()

    # Newest first for recent form
    newest_first = sorted(player_matches, key=_chronological_key, reverse=True)

    wins = 0
    losses = 0
    total_elo_change = 0
    surface_counts = {surface: [0, 0] for surface in Surface}
    results: list[str] = []

    for match in newest_first:
        is_winner = match.score.winner_id == player_id
        results.append("W" if is_winner else "L")

        if is_winner:
            wins += 1
        else:
            losses += 1

        if match.surface is not None:
            surface_counts[Surface(match.surface)][0 if is_winner else 1] += 1

        change = match.elo_change_for(player_id)
        if change is not None:
            total_elo_change += change

    by_surface = {
        surface: SurfaceRecord(
            wins=won,
            losses=lost,
            win_rate=percentage(won, won + lost),
        )
        for surface, (won, lost) in surface_counts.items()
    }

    # Streaks, oldest to newest
    longest_win_streak = 0
    longest_loss_streak = 0
    win_run = 0
    loss_run = 0

    for result in reversed(results):
        if result == "W":
            win_run += 1
            loss_run = 0
            longest_win_streak = max(longest_win_streak, win_run)
        else:
            loss_run += 1
            win_run = 0
            longest_loss_streak = max(longest_loss_streak, loss_run)

    if win_run > 0:
        current_streak, streak_type = win_run, StreakType.WIN
    elif loss_run > 0:
        current_streak, streak_type = loss_run, StreakType.LOSS
    else:
        current_streak, streak_type = 0, StreakType.NONE

    total = len(player_matches)
    logger.debug(
        "Statistics for %s: %d matches, %d wins, streak %d (%s)",
        player_id, total, wins, current_streak, streak_type.value,
    )

    return MatchStatistics(
        total_matches=total,
        wins=wins,
        losses=losses,
        win_rate=percentage(wins, total),
        average_elo_change=round_one_decimal(total_elo_change / total),
        by_surface=by_surface,
        recent_form=results[:RECENT_FORM_LENGTH],
        longest_win_streak=longest_win_streak,
        longest_loss_streak=longest_loss_streak,
        current_streak=current_streak,
        streak_type=streak_type,
    )
