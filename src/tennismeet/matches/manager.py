"""
Match management.

create_match() is the single place where a completed match and the
resulting rating changes are reconciled: the score is validated, the
winner determined, Elo deltas computed and clamped, and an immutable
Match is returned. Nothing is mutated, so a caller either gets the whole
record or an exception and can persist accordingly.
"""

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Union

from tennismeet.config import settings
from tennismeet.elo.calculator import calculate_elo_change, validate_elo
from tennismeet.matches.models import (
    EloChanges,
    Match,
    MatchFilters,
    MatchLocation,
    MatchScore,
    MatchSet,
    MatchStatus,
    Surface,
)
from tennismeet.matches.score import (
    InvalidMatchScoreError,
    determine_winner,
    validate_match_score,
)
from tennismeet.matches.statistics import percentage
from tennismeet.players.models import Player, PlayerStats
from tennismeet.statuses import normalize_status_filter

logger = logging.getLogger(__name__)

SORT_KEYS = ("date", "location", "surface")


def _generate_match_id() -> str:
    return f"match-{uuid.uuid4().hex[:12]}"


def _current_stats(player: Player) -> PlayerStats:
    """A player's stats, or a fresh record at the default rating."""
    return player.stats or PlayerStats(elo=settings.default_elo)


def create_match(
    player1: Player,
    player2: Player,
    score: Union[MatchScore, Sequence[MatchSet]],
    location: MatchLocation,
    surface: Optional[Surface] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Match:
    """
    Record a completed match between two players.

    Args:
        player1: First player (sets are written from their side)
        player2: Second player
        score: MatchScore or plain list of sets
        location: Where the match was played
        surface: Court surface, if known
        notes: Free-text notes
        now: Completion timestamp (defaults to datetime.now())

    Returns:
        Completed Match with winner and Elo changes filled in

    Raises:
        InvalidMatchScoreError: If the score breaks tennis rules
    """
    sets = tuple(score.sets if isinstance(score, MatchScore) else score)

    validation = validate_match_score(sets)
    if not validation.valid:
        logger.warning(
            "Rejected match %s vs %s: %s", player1.id, player2.id, validation.error
        )
        raise InvalidMatchScoreError(f"Invalid match score: {validation.error}")

    winner_id = determine_winner(sets, player1.id, player2.id)
    player1_won = winner_id == player1.id

    stats1 = _current_stats(player1)
    stats2 = _current_stats(player2)
    winner_stats, loser_stats = (stats1, stats2) if player1_won else (stats2, stats1)

    elo = calculate_elo_change(
        winner_stats.elo,
        loser_stats.elo,
        winner_stats.matches_played,
        loser_stats.matches_played,
    )
    side1, side2 = (elo.winner, elo.loser) if player1_won else (elo.loser, elo.winner)

    elo_changes = EloChanges(
        player1_change=side1.change,
        player2_change=side2.change,
        player1_new_elo=validate_elo(side1.new_elo),
        player2_new_elo=validate_elo(side2.new_elo),
    )

    timestamp = now or datetime.now()
    match = Match(
        id=_generate_match_id(),
        player1_id=player1.id,
        player2_id=player2.id,
        status=MatchStatus.COMPLETED,
        location=location,
        surface=surface,
        score=MatchScore(sets=sets, winner_id=winner_id),
        elo_changes=elo_changes,
        notes=notes,
        completed_date=timestamp,
        created_at=timestamp,
        updated_at=timestamp,
    )

    logger.info(
        "Created match %s: %s beat %s (%+d / %+d)",
        match.id,
        winner_id,
        match.opponent_of(winner_id),
        elo.winner.change,
        elo.loser.change,
    )
    return match


def apply_match_result(player: Player, match: Match) -> Player:
    """
    Return a copy of ``player`` with stats updated for a completed match.

    The new rating is taken from the match's recorded Elo changes, so the
    player's history and the match record always agree.

    Raises:
        ValueError: If the match is not completed, has no Elo changes,
            or the player did not play in it
    """
    if match.status != MatchStatus.COMPLETED or match.score is None:
        raise ValueError(f"Match {match.id} is not completed")
    if match.elo_changes is None:
        raise ValueError(f"Match {match.id} has no Elo changes")
    if not match.involves(player.id):
        raise ValueError(f"Player {player.id} did not play in match {match.id}")

    stats = _current_stats(player)
    won = match.score.winner_id == player.id
    new_elo = (
        match.elo_changes.player1_new_elo
        if player.id == match.player1_id
        else match.elo_changes.player2_new_elo
    )

    played = stats.matches_played + 1
    matches_won = stats.matches_won + (1 if won else 0)
    matches_lost = stats.matches_lost + (0 if won else 1)

    if won:
        streak = stats.current_streak + 1 if stats.current_streak > 0 else 1
    else:
        streak = stats.current_streak - 1 if stats.current_streak < 0 else -1

    updated = PlayerStats(
        elo=new_elo,
        matches_played=played,
        matches_won=matches_won,
        matches_lost=matches_lost,
        win_rate=percentage(matches_won, played),
        current_streak=streak,
        best_streak=max(stats.best_streak, streak),
    )
    return replace(player, stats=updated)


def _day_bounds(value: Union[date, datetime], end: bool) -> datetime:
    """Widen a plain date filter to the start or end of that day."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.max.time() if end else datetime.min.time())


def filter_matches(matches: Iterable[Match], filters: MatchFilters) -> list[Match]:
    """
    Filter matches by player, status, surface, date range and result.

    All filters are conjunctive. The date range is inclusive and applies
    to the completion date; matches without one are not excluded by it.
    The result filter ('won'/'lost') is relative to filters.player_id and
    drops matches that have no score.
    """
    statuses = (
        set(normalize_status_filter(filters.status))
        if filters.status is not None
        else None
    )
    date_from = _day_bounds(filters.date_from, end=False) if filters.date_from else None
    date_to = _day_bounds(filters.date_to, end=True) if filters.date_to else None

    result_filter = filters.result if filters.result not in (None, "all") else None
    if result_filter is not None and result_filter not in ("won", "lost"):
        raise ValueError(f"result must be 'won', 'lost' or 'all', got '{result_filter}'")

    filtered = []
    for match in matches:
        if filters.player_id and not match.involves(filters.player_id):
            continue

        if statuses is not None and match.status.value not in statuses:
            continue

        if filters.surface is not None and match.surface != filters.surface:
            continue

        if match.completed_date is not None:
            if date_from is not None and match.completed_date < date_from:
                continue
            if date_to is not None and match.completed_date > date_to:
                continue

        if result_filter and filters.player_id:
            if match.score is None:
                continue
            is_winner = match.score.winner_id == filters.player_id
            if result_filter == "won" and not is_winner:
                continue
            if result_filter == "lost" and is_winner:
                continue

        filtered.append(match)

    return filtered


def sort_matches(
    matches: Iterable[Match],
    sort_by: str = "date",
    order: str = "desc",
) -> list[Match]:
    """
    Sort matches by date, location (city) or surface.

    The sort is stable in both directions. Date uses the completion date,
    falling back to creation time; missing surfaces sort as 'hard'.

    Raises:
        ValueError: For an unknown sort key or order
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"sort_by must be one of {SORT_KEYS}, got '{sort_by}'")
    if order not in ("asc", "desc"):
        raise ValueError(f"order must be 'asc' or 'desc', got '{order}'")

    if sort_by == "date":
        def key(m: Match):
            return m.completed_date or m.created_at
    elif sort_by == "location":
        def key(m: Match):
            return m.location.city
    else:
        def key(m: Match):
            return Surface(m.surface).value if m.surface else Surface.HARD.value

    return sorted(matches, key=key, reverse=(order == "desc"))
