"""
Player model and partner search.

Key components:
- Player / PlayerStats: the player value objects
- search_players: filter + weighted ranking of potential partners
- calculate_player_score: the 0-100 match score used for ranking
"""

from tennismeet.players.models import (
    GeoLocation,
    Player,
    PlayerStats,
    PlayStyle,
    PreferredSurface,
    SkillLevel,
)
from tennismeet.players.search import (
    DEFAULT_WEIGHTS,
    PlayerSearchFilters,
    PlayerSearchResult,
    RankingWeights,
    calculate_player_score,
    get_nearby_players,
    get_recommended_players,
    get_similar_skill_players,
    search_players,
)

__all__ = [
    "GeoLocation",
    "Player",
    "PlayerStats",
    "PlayStyle",
    "PreferredSurface",
    "SkillLevel",
    "DEFAULT_WEIGHTS",
    "PlayerSearchFilters",
    "PlayerSearchResult",
    "RankingWeights",
    "calculate_player_score",
    "get_nearby_players",
    "get_recommended_players",
    "get_similar_skill_players",
    "search_players",
]
