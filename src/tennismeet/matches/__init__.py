"""
Match recording and statistics.

Key components:
- score: Tennis-rule score validation, display formatting and parsing
- manager: Match creation (with Elo), player stat updates, filtering, sorting
- statistics: Per-player record, surface splits, form and streaks
"""

from tennismeet.matches.manager import (
    apply_match_result,
    create_match,
    filter_matches,
    sort_matches,
)
from tennismeet.matches.models import (
    EloChanges,
    Match,
    MatchFilters,
    MatchLocation,
    MatchScore,
    MatchSet,
    MatchStatistics,
    MatchStatus,
    StreakType,
    Surface,
    SurfaceRecord,
    Tiebreak,
)
from tennismeet.matches.score import (
    InvalidMatchScoreError,
    ScoreParseError,
    ScoreValidation,
    determine_winner,
    format_match_score,
    parse_score,
    validate_match_score,
)
from tennismeet.matches.statistics import calculate_match_statistics

__all__ = [
    # Models
    "EloChanges",
    "Match",
    "MatchFilters",
    "MatchLocation",
    "MatchScore",
    "MatchSet",
    "MatchStatistics",
    "MatchStatus",
    "StreakType",
    "Surface",
    "SurfaceRecord",
    "Tiebreak",
    # Scores
    "InvalidMatchScoreError",
    "ScoreParseError",
    "ScoreValidation",
    "determine_winner",
    "format_match_score",
    "parse_score",
    "validate_match_score",
    # Management
    "apply_match_result",
    "create_match",
    "filter_matches",
    "sort_matches",
    "calculate_match_statistics",
]
