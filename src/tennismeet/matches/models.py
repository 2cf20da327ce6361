"""
Match domain model.

A Match references its two players by id. A score only exists once the
match is completed, and the Elo changes recorded at completion are
immutable history, so Match is a frozen dataclass.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


class MatchStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Surface(str, Enum):
    """Playing surface of a match or court."""
    HARD = "hard"
    CLAY = "clay"
    GRASS = "grass"
    CARPET = "carpet"


class StreakType(str, Enum):
    WIN = "win"
    LOSS = "loss"
    NONE = "none"


@dataclass(frozen=True)
class Tiebreak:
    """Points won by each player in a set tiebreak."""
    player1_points: int
    player2_points: int


@dataclass(frozen=True)
class MatchSet:
    """
    Represents a single set score.

    Attributes:
        player1_games: Games won by player 1
        player2_games: Games won by player 2
        tiebreak: Tiebreak points, required for a 7-6 set
    """
    player1_games: int
    player2_games: int
    tiebreak: Optional[Tiebreak] = None

    @property
    def player1_won(self) -> bool:
        """Whether player 1 took this set (ties count for player 2)."""
        return self.player1_games > self.player2_games

    def __str__(self) -> str:
        return f"{self.player1_games}-{self.player2_games}"


@dataclass(frozen=True)
class MatchScore:
    sets: tuple[MatchSet, ...]
    winner_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.sets, tuple):
            object.__setattr__(self, "sets", tuple(self.sets))


@dataclass(frozen=True)
class EloChanges:
    """Rating movement recorded when a match is completed."""
    player1_change: int
    player2_change: int
    player1_new_elo: int
    player2_new_elo: int


@dataclass(frozen=True)
class MatchLocation:
    name: str
    city: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class Match:
    """
    A match between two players.

    Invariant: ``score`` is only present when status is completed.
    """
    id: str
    player1_id: str
    player2_id: str
    status: MatchStatus
    location: MatchLocation
    created_at: datetime
    updated_at: datetime
    surface: Optional[Surface] = None
    score: Optional[MatchScore] = None
    elo_changes: Optional[EloChanges] = None
    notes: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None

    def __post_init__(self):
        if self.score is not None and self.status != MatchStatus.COMPLETED:
            raise ValueError(
                f"Match {self.id} has a score but status is '{self.status.value}'"
            )

    def involves(self, player_id: str) -> bool:
        """Whether the player took part in this match."""
        return player_id in (self.player1_id, self.player2_id)

    def opponent_of(self, player_id: str) -> str:
        return self.player2_id if player_id == self.player1_id else self.player1_id

    def elo_change_for(self, player_id: str) -> Optional[int]:
        """Rating change recorded for one side, or None if not computed."""
        if self.elo_changes is None:
            return None
        if player_id == self.player1_id:
            return self.elo_changes.player1_change
        return self.elo_changes.player2_change


@dataclass
class MatchFilters:
    """
    Conjunctive filters for filter_matches().

    ``status`` accepts a single status or a collection of statuses.
    ``result`` is 'won', 'lost' or 'all' and is relative to ``player_id``.
    """
    player_id: Optional[str] = None
    status: Union[MatchStatus, str, list, tuple, set, None] = None
    surface: Optional[Surface] = None
    date_from: Optional[Union[date, datetime]] = None
    date_to: Optional[Union[date, datetime]] = None
    result: Optional[str] = None


@dataclass
class SurfaceRecord:
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0


def _empty_surface_records() -> dict[Surface, SurfaceRecord]:
    return {surface: SurfaceRecord() for surface in Surface}


@dataclass
class MatchStatistics:
    """Aggregate record of a player's completed matches."""
    total_matches: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    average_elo_change: float = 0.0
    by_surface: dict[Surface, SurfaceRecord] = field(default_factory=_empty_surface_records)
    recent_form: list[str] = field(default_factory=list)
    longest_win_streak: int = 0
    longest_loss_streak: int = 0
    current_streak: int = 0
    streak_type: StreakType = StreakType.NONE
