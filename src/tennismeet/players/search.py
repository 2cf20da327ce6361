"""
Player search and partner ranking.

Candidates are filtered by structured criteria, then ranked by a weighted
match score built from six factors, each scored between 0 and 1:

    score = round(100 * sum(weight_i * factor_i))

Factors:
- Skill level: how many tiers apart the players are
- Elo: absolute rating difference
- Distance: great-circle miles between the players
- Play style: identical, complementary or neutral styles
- Surface: shared surface preference
- Availability: number of shared availability tags

Results are ordered by score (highest first), then distance (closest first).
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from tennismeet.config import settings
from tennismeet.geo import distance_miles
from tennismeet.players.models import (
    Player,
    PlayStyle,
    PreferredSurface,
    SkillLevel,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingWeights:
    """Weights for each ranking factor (defaults sum to 1.0)."""
    skill_level: float = 0.25
    elo_proximity: float = 0.20
    distance_proximity: float = 0.20
    play_style: float = 0.15
    surface: float = 0.10
    availability: float = 0.10


DEFAULT_WEIGHTS = RankingWeights()


@dataclass
class PlayerSearchFilters:
    """
    Structured search criteria. Empty collections and None mean "no filter".

    max_distance is in miles; 0 also means "no filter".
    """
    skill_levels: Sequence[SkillLevel] = field(default_factory=list)
    play_styles: Sequence[PlayStyle] = field(default_factory=list)
    preferred_surfaces: Sequence[PreferredSurface] = field(default_factory=list)
    availability: Sequence[str] = field(default_factory=list)
    max_distance: Optional[float] = None
    min_elo: Optional[float] = None
    max_elo: Optional[float] = None
    search_query: Optional[str] = None


@dataclass(frozen=True)
class PlayerSearchResult:
    player: Player
    match_score: int
    distance: float


# Style pairs that make for an interesting match-up
COMPLEMENTARY_STYLES = (
    frozenset({PlayStyle.AGGRESSIVE, PlayStyle.DEFENSIVE}),
    frozenset({PlayStyle.SERVE_AND_VOLLEY, PlayStyle.BASELINE}),
)

# (inclusive upper bound, score)
ELO_BANDS = ((100, 1.0), (200, 0.8), (300, 0.6), (400, 0.4), (500, 0.2))
DISTANCE_BANDS = ((5, 1.0), (10, 0.8), (15, 0.6), (20, 0.4), (30, 0.2))
BAND_FLOOR = 0.1


def _banded(value: float, bands) -> float:
    for upper_bound, score in bands:
        if value <= upper_bound:
            return score
    return BAND_FLOOR


# =============================================================================
# Factor scores
# =============================================================================

def skill_level_score(current: SkillLevel, target: SkillLevel) -> float:
    """Same tier = 1.0, adjacent = 0.5, two apart = 0.25, further = 0.1."""
    difference = abs(SkillLevel(current).rank - SkillLevel(target).rank)
    return {0: 1.0, 1: 0.5, 2: 0.25}.get(difference, 0.1)


def elo_proximity_score(current_elo: float, target_elo: float) -> float:
    """Closer ratings score higher, in 100 point bands."""
    return _banded(abs(current_elo - target_elo), ELO_BANDS)


def distance_score(distance: float) -> float:
    """Closer players score higher, in mile bands."""
    return _banded(distance, DISTANCE_BANDS)


def play_style_score(
    current: Optional[PlayStyle],
    target: Optional[PlayStyle],
) -> float:
    """
    Same style = 1.0, either all-court = 0.8, complementary = 0.7,
    anything else (or unknown) = 0.5.
    """
    if current is None or target is None:
        return 0.5
    current, target = PlayStyle(current), PlayStyle(target)
    if current == target:
        return 1.0
    if PlayStyle.ALL_COURT in (current, target):
        return 0.8
    if frozenset({current, target}) in COMPLEMENTARY_STYLES:
        return 0.7
    return 0.5


def surface_score(
    current: Optional[PreferredSurface],
    target: Optional[PreferredSurface],
) -> float:
    """Either side 'any' = 0.8, same surface = 1.0, different = 0.3, unknown = 0.5."""
    if current is None or target is None:
        return 0.5
    current, target = PreferredSurface(current), PreferredSurface(target)
    if PreferredSurface.ANY in (current, target):
        return 0.8
    if current == target:
        return 1.0
    return 0.3


def availability_score(
    current: Sequence[str],
    target: Sequence[str],
) -> float:
    """Score by number of shared availability tags (unknown = 0.5)."""
    if not current or not target:
        return 0.5

    target_tags = set(target)
    shared = sum(1 for tag in current if tag in target_tags)

    if shared == 0:
        return 0.2
    if shared >= 3:
        return 1.0
    if shared >= 2:
        return 0.8
    return 0.5


def _elo_or_default(player: Player) -> float:
    return player.stats.elo if player.stats else settings.default_elo


def calculate_player_score(
    current_user: Player,
    target_player: Player,
    weights: RankingWeights = DEFAULT_WEIGHTS,
    distance: Optional[float] = None,
) -> int:
    """
    Calculate the 0-100 match score of ``target_player`` for ``current_user``.

    Args:
        current_user: Player doing the search
        target_player: Candidate partner
        weights: Factor weights
        distance: Pre-computed distance in miles (computed if omitted)

    Returns:
        Rounded match score
    """
    if distance is None:
        distance = distance_miles(
            current_user.location.latitude,
            current_user.location.longitude,
            target_player.location.latitude,
            target_player.location.longitude,
        )

    total = (
        skill_level_score(current_user.skill_level, target_player.skill_level)
        * weights.skill_level
        + elo_proximity_score(_elo_or_default(current_user), _elo_or_default(target_player))
        * weights.elo_proximity
        + distance_score(distance) * weights.distance_proximity
        + play_style_score(current_user.play_style, target_player.play_style)
        * weights.play_style
        + surface_score(current_user.preferred_surface, target_player.preferred_surface)
        * weights.surface
        + availability_score(current_user.availability, target_player.availability)
        * weights.availability
    )
    # Half-up on the 0-100 scale; the epsilon absorbs float noise from the weights
    return int(total * 100 + 0.5 + 1e-9)


# =============================================================================
# Filtering
# =============================================================================

def _matches_filters(player: Player, filters: PlayerSearchFilters) -> bool:
    if filters.skill_levels and player.skill_level not in filters.skill_levels:
        return False

    if filters.play_styles:
        if player.play_style is None or player.play_style not in filters.play_styles:
            return False

    if filters.preferred_surfaces:
        if player.preferred_surface is None:
            return False
        if (
            player.preferred_surface not in filters.preferred_surfaces
            and player.preferred_surface != PreferredSurface.ANY
        ):
            return False

    if filters.availability:
        if not player.availability:
            return False
        if not set(filters.availability) & set(player.availability):
            return False

    # Players without stats are treated as rated 0 for range filters
    elo = player.stats.elo if player.stats else 0
    if filters.min_elo is not None and elo < filters.min_elo:
        return False
    if filters.max_elo is not None and elo > filters.max_elo:
        return False

    if filters.search_query:
        query = filters.search_query.lower()
        in_name = query in player.name.lower()
        in_bio = bool(player.bio) and query in player.bio.lower()
        if not (in_name or in_bio):
            return False

    return True


def search_players(
    current_user: Player,
    all_players: Iterable[Player],
    filters: Optional[PlayerSearchFilters] = None,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> list[PlayerSearchResult]:
    """
    Filter and rank potential partners for ``current_user``.

    Args:
        current_user: The searching player (excluded from results)
        all_players: Candidate pool
        filters: Optional structured filters
        weights: Ranking weights

    Returns:
        Results sorted by match score (desc), then distance (asc)
    """
    filters = filters or PlayerSearchFilters()

    candidates = [
        p for p in all_players
        if p.id != current_user.id and _matches_filters(p, filters)
    ]

    results = []
    for player in candidates:
        distance = distance_miles(
            current_user.location.latitude,
            current_user.location.longitude,
            player.location.latitude,
            player.location.longitude,
        )
        if filters.max_distance and distance > filters.max_distance:
            continue

        score = calculate_player_score(current_user, player, weights, distance)
        logger.debug("Scored %s for %s: %d (%.1f mi)", player.id, current_user.id, score, distance)
        results.append(PlayerSearchResult(player=player, match_score=score, distance=distance))

    results.sort(key=lambda r: (-r.match_score, r.distance))
    return results


def get_recommended_players(
    current_user: Player,
    all_players: Iterable[Player],
    limit: Optional[int] = None,
) -> list[PlayerSearchResult]:
    """Top matches without explicit filters."""
    limit = settings.recommended_player_limit if limit is None else limit
    return search_players(current_user, all_players)[:limit]


def get_nearby_players(
    current_user: Player,
    all_players: Iterable[Player],
    max_distance: Optional[float] = None,
    limit: Optional[int] = None,
) -> list[PlayerSearchResult]:
    """Ranked players within ``max_distance`` miles (default from settings)."""
    radius = settings.nearby_player_miles if max_distance is None else max_distance
    results = search_players(
        current_user, all_players, PlayerSearchFilters(max_distance=radius)
    )
    return results[:limit] if limit else results


def get_similar_skill_players(
    current_user: Player,
    all_players: Iterable[Player],
    limit: Optional[int] = None,
) -> list[PlayerSearchResult]:
    """Ranked players within one skill tier of ``current_user``."""
    levels = list(SkillLevel)
    rank = SkillLevel(current_user.skill_level).rank
    nearby_levels = levels[max(0, rank - 1): rank + 2]

    results = search_players(
        current_user, all_players, PlayerSearchFilters(skill_levels=nearby_levels)
    )
    return results[:limit] if limit else results
