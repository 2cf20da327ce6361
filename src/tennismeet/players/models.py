"""
Player domain model.

A player is owned by the application. Their stats are only ever changed
through match completion (see tennismeet.matches.manager.apply_match_result),
so the dataclasses here are plain value objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SkillLevel(str, Enum):
    """Self-reported skill tier, in ascending order."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PROFESSIONAL = "professional"

    @property
    def rank(self) -> int:
        """Position of this tier in the ladder (0 = beginner)."""
        return list(SkillLevel).index(self)


class PlayStyle(str, Enum):
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    ALL_COURT = "all-court"
    SERVE_AND_VOLLEY = "serve-and-volley"
    BASELINE = "baseline"


class PreferredSurface(str, Enum):
    HARD = "hard"
    CLAY = "clay"
    GRASS = "grass"
    ANY = "any"


@dataclass(frozen=True)
class GeoLocation:
    """Where a player is based."""
    latitude: float
    longitude: float
    city: Optional[str] = None
    state: Optional[str] = None


@dataclass(frozen=True)
class PlayerStats:
    """
    Rating and record for a player.

    Attributes:
        elo: Current Elo rating
        matches_played: Completed matches
        matches_won: Completed matches won
        matches_lost: Completed matches lost
        win_rate: Percentage of matches won (one decimal)
        current_streak: Signed run of results (+3 = three wins, -2 = two losses)
        best_streak: Longest win streak ever recorded
    """
    elo: float
    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    win_rate: float = 0.0
    current_streak: int = 0
    best_streak: int = 0


@dataclass(frozen=True)
class Player:
    """A TennisMeet user looking for hitting partners."""
    id: str
    name: str
    email: str
    skill_level: SkillLevel
    location: GeoLocation
    play_style: Optional[PlayStyle] = None
    preferred_surface: Optional[PreferredSurface] = None
    availability: tuple[str, ...] = field(default_factory=tuple)
    bio: Optional[str] = None
    stats: Optional[PlayerStats] = None

    def __post_init__(self):
        # Accept lists from callers but store an immutable tuple
        if not isinstance(self.availability, tuple):
            object.__setattr__(self, "availability", tuple(self.availability))
