"""
Tennis score validation, formatting and parsing.

Match scores are entered by players after they finish, so they are
checked against the rules of a standard set before a match is recorded:
- A set is won with 6 games and a 2 game lead: "6-0" ... "6-4"
- At 5-5 the set continues to "7-5"
- At 6-6 a tiebreak decides it, recorded as "7-6" plus tiebreak points
- A tiebreak is won with at least 7 points and a 2 point lead
- Best of 3 needs 2 sets, best of 5 needs 3

Scores are displayed as "6-4, 7-6(5)" where the number in brackets is
the tiebreak loser's points. parse_score() reads that format back.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from tennismeet.matches.models import MatchSet, Tiebreak
from tennismeet.results import ValidationResult


class ScoreParseError(ValueError):
    """Raised when a score string cannot be parsed."""
    pass


class InvalidMatchScoreError(ValueError):
    """Raised when a match is created from a score that breaks tennis rules."""
    pass


@dataclass(frozen=True)
class ScoreValidation(ValidationResult):
    """Outcome of validate_match_score()."""


MIN_SETS = 2
MAX_SETS = 5


def count_sets_won(sets: Sequence[MatchSet]) -> tuple[int, int]:
    """
    Count sets won by each player.

    A set counts for player 1 when they won more games; anything else
    counts for player 2.

    Returns:
        (player1_sets, player2_sets)
    """
    player1_sets = sum(1 for s in sets if s.player1_won)
    return player1_sets, len(sets) - player1_sets


def _validate_set(index: int, match_set: MatchSet) -> Optional[str]:
    """Return an error message for an invalid set, or None."""
    label = f"Set {index + 1}"
    p1_games = match_set.player1_games
    p2_games = match_set.player2_games

    if p1_games < 0 or p2_games < 0:
        return f"{label}: Games cannot be negative"

    max_games = max(p1_games, p2_games)
    min_games = min(p1_games, p2_games)

    if max_games < 6:
        return f"{label}: Winner must have at least 6 games"

    # Standard set, won by 2: 6-0 through 6-4
    if max_games == 6 and min_games > 4:
        return f"{label}: Invalid score {max_games}-{min_games}"

    # Extended set: 7-5, or 7-6 via tiebreak
    if max_games == 7:
        if min_games not in (5, 6):
            return f"{label}: Invalid score {max_games}-{min_games}"
        if min_games == 6 and match_set.tiebreak is None:
            return f"{label}: 7-6 score requires tiebreak details"

    if max_games > 7:
        return f"{label}: Games cannot exceed 7 (use tiebreak)"

    # A tiebreak on a set that never reached 6-6 is tolerated; only its
    # own points are checked.
    if match_set.tiebreak is not None:
        tb = match_set.tiebreak
        tb_max = max(tb.player1_points, tb.player2_points)
        tb_min = min(tb.player1_points, tb.player2_points)

        if tb_max < 7:
            return f"{label}: Tiebreak winner must have at least 7 points"
        if tb_max - tb_min < 2:
            return f"{label}: Tiebreak must be won by 2 points"

    return None


def validate_match_score(sets: Sequence[MatchSet]) -> ScoreValidation:
    """
    Validate a full match score against tennis rules.

    Args:
        sets: Set scores in the order they were played

    Returns:
        ScoreValidation with valid=False and a human-readable error
        for the first rule that is broken

    Examples:
        >>> validate_match_score([MatchSet(6, 4), MatchSet(6, 3)]).valid
        True
        >>> validate_match_score([MatchSet(6, 4)]).error
        'Match must have at least 2 sets'
    """
    if len(sets) < MIN_SETS:
        return ScoreValidation(False, "Match must have at least 2 sets")

    if len(sets) > MAX_SETS:
        return ScoreValidation(False, "Match cannot have more than 5 sets")

    for i, match_set in enumerate(sets):
        error = _validate_set(i, match_set)
        if error:
            return ScoreValidation(False, error)

    player1_sets, player2_sets = count_sets_won(sets)
    most_sets = max(player1_sets, player2_sets)

    # Best of 3: need 2 sets to win
    if len(sets) <= 3 and most_sets < 2:
        return ScoreValidation(
            False, "Match incomplete: No player won 2 sets (best of 3)"
        )

    # Best of 5: need 3 sets to win
    if len(sets) > 3 and most_sets < 3:
        return ScoreValidation(
            False, "Match incomplete: No player won 3 sets (best of 5)"
        )

    return ScoreValidation(True)


def determine_winner(
    sets: Sequence[MatchSet],
    player1_id: str,
    player2_id: str,
) -> str:
    """Return the id of the player who won the majority of sets."""
    player1_sets, player2_sets = count_sets_won(sets)
    return player1_id if player1_sets > player2_sets else player2_id


def format_match_score(sets: Sequence[MatchSet]) -> str:
    """
    Format a score for display, e.g. "6-4, 7-6(5)".

    The bracketed number is the tiebreak loser's points (tennis convention).
    """
    parts = []
    for s in sets:
        text = f"{s.player1_games}-{s.player2_games}"
        if s.tiebreak is not None:
            loser_points = (
                s.tiebreak.player2_points if s.player1_won else s.tiebreak.player1_points
            )
            text += f"({loser_points})"
        parts.append(text)
    return ", ".join(parts)


# 7-6(5) or 7-6(7-5)
_TIEBREAK_SET = re.compile(r"^(\d+)-(\d+)\((\d+)(?:-(\d+))?\)$")
# 6-4
_REGULAR_SET = re.compile(r"^(\d+)-(\d+)$")


def parse_score(score_str: str) -> list[MatchSet]:
    """
    Parse a display score back into sets.

    Handles:
    - Regular sets: "6-4, 6-3" or "6-4 6-3"
    - Tiebreak with the loser's points: "7-6(5)"
    - Tiebreak with both points: "7-6(7-5)"

    Args:
        score_str: Score as typed by a player or produced by format_match_score()

    Returns:
        List of MatchSet in playing order (not validated against tennis rules)

    Raises:
        ScoreParseError: If the string is empty or a set cannot be read

    Examples:
        >>> parse_score("6-4, 7-6(5)")[1].tiebreak
        Tiebreak(player1_points=7, player2_points=5)
    """
    if not score_str or not score_str.strip():
        raise ScoreParseError("Empty score string")

    parts = [p for p in re.split(r"[,\s]+", score_str.strip()) if p]
    return [_parse_set(part, score_str) for part in parts]


def _parse_set(set_str: str, original: str) -> MatchSet:
    """Parse a single set such as '6-4', '7-6(5)' or '7-6(7-5)'."""
    tb_match = _TIEBREAK_SET.match(set_str)

    if tb_match:
        games_1 = int(tb_match.group(1))
        games_2 = int(tb_match.group(2))
        tb_first = int(tb_match.group(3))
        tb_second = tb_match.group(4)

        if tb_second is not None:
            # Both tiebreak scores given, in player order: 7-6(7-5)
            tiebreak = Tiebreak(tb_first, int(tb_second))
        else:
            # Only the loser's points given: 7-6(5)
            # The winner has at least 7 and leads by 2
            winner_points = max(7, tb_first + 2)
            if games_1 > games_2:
                tiebreak = Tiebreak(winner_points, tb_first)
            else:
                tiebreak = Tiebreak(tb_first, winner_points)

        return MatchSet(games_1, games_2, tiebreak)

    regular_match = _REGULAR_SET.match(set_str)
    if regular_match:
        return MatchSet(int(regular_match.group(1)), int(regular_match.group(2)))

    raise ScoreParseError(f"Could not parse set '{set_str}' in '{original}'")
