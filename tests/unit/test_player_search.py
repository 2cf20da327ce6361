"""
Unit tests for player search and partner ranking.

Fixture players (see conftest):
- alice: the searching player, intermediate baseliner in San Francisco
- bob: near-identical profile, under a mile away          -> score 98
- carol: advanced serve-and-volleyer in Oakland, ~8 miles -> score 59
- dave: beginner without stats in San Jose, ~42 miles     -> score 47
"""

import pytest

from tennismeet.players import (
    PlayerSearchFilters,
    PlayStyle,
    PreferredSurface,
    RankingWeights,
    SkillLevel,
    calculate_player_score,
    get_nearby_players,
    get_recommended_players,
    get_similar_skill_players,
    search_players,
)
from tennismeet.players.search import (
    availability_score,
    distance_score,
    elo_proximity_score,
    play_style_score,
    skill_level_score,
    surface_score,
)


def _ids(results):
    return [r.player.id for r in results]


class TestFactorScores:
    """Tests for the individual ranking factors."""

    @pytest.mark.parametrize(
        "target,expected",
        [
            (SkillLevel.INTERMEDIATE, 1.0),
            (SkillLevel.ADVANCED, 0.5),
            (SkillLevel.PROFESSIONAL, 0.25),
        ],
    )
    def test_skill_level(self, target, expected):
        assert skill_level_score(SkillLevel.INTERMEDIATE, target) == expected

    def test_skill_level_three_apart(self):
        assert skill_level_score(SkillLevel.BEGINNER, SkillLevel.PROFESSIONAL) == 0.1

    @pytest.mark.parametrize(
        "difference,expected",
        [(0, 1.0), (100, 1.0), (101, 0.8), (250, 0.6), (400, 0.4), (500, 0.2), (501, 0.1)],
    )
    def test_elo_proximity(self, difference, expected):
        assert elo_proximity_score(1500, 1500 + difference) == expected
        assert elo_proximity_score(1500 + difference, 1500) == expected

    @pytest.mark.parametrize(
        "miles,expected",
        [(0.5, 1.0), (5, 1.0), (8, 0.8), (15, 0.6), (19.9, 0.4), (30, 0.2), (31, 0.1)],
    )
    def test_distance(self, miles, expected):
        assert distance_score(miles) == expected

    def test_play_style(self):
        assert play_style_score(PlayStyle.BASELINE, PlayStyle.BASELINE) == 1.0
        assert play_style_score(PlayStyle.ALL_COURT, PlayStyle.DEFENSIVE) == 0.8
        assert play_style_score(PlayStyle.AGGRESSIVE, PlayStyle.DEFENSIVE) == 0.7
        assert play_style_score(PlayStyle.BASELINE, PlayStyle.SERVE_AND_VOLLEY) == 0.7
        assert play_style_score(PlayStyle.BASELINE, PlayStyle.DEFENSIVE) == 0.5
        assert play_style_score(None, PlayStyle.DEFENSIVE) == 0.5

    def test_surface(self):
        assert surface_score(PreferredSurface.CLAY, PreferredSurface.CLAY) == 1.0
        assert surface_score(PreferredSurface.ANY, PreferredSurface.ANY) == 0.8
        assert surface_score(PreferredSurface.ANY, PreferredSurface.CLAY) == 0.8
        assert surface_score(PreferredSurface.HARD, PreferredSurface.ANY) == 0.8
        assert surface_score(PreferredSurface.HARD, PreferredSurface.GRASS) == 0.3
        assert surface_score(PreferredSurface.HARD, None) == 0.5

    def test_availability(self):
        tags = ["weekday-mornings", "weekday-evenings", "weekend-mornings"]

        assert availability_score(tags, tags) == 1.0
        assert availability_score(tags, tags[:2]) == 0.8
        assert availability_score(tags, tags[:1]) == 0.5
        assert availability_score(tags, ["weekend-evenings"]) == 0.2
        assert availability_score(tags, []) == 0.5


class TestCalculatePlayerScore:
    """Tests for calculate_player_score()."""

    def test_near_identical_player(self, alice, bob):
        assert calculate_player_score(alice, bob) == 98

    def test_mixed_profile(self, alice, carol):
        assert calculate_player_score(alice, carol) == 59

    def test_player_without_stats_uses_default_rating(self, alice, dave):
        # 1500 vs the default 1200 falls in the 300 point band
        assert calculate_player_score(alice, dave) == 47

    def test_precomputed_distance(self, alice, carol):
        # Pretending carol is close moves distance from 0.8 to 1.0 (+4)
        assert calculate_player_score(alice, carol, distance=1.0) == 63

    def test_custom_weights(self, alice, carol):
        skill_only = RankingWeights(
            skill_level=1.0,
            elo_proximity=0.0,
            distance_proximity=0.0,
            play_style=0.0,
            surface=0.0,
            availability=0.0,
        )
        assert calculate_player_score(alice, carol, skill_only) == 50


class TestSearchPlayers:
    """Tests for search_players()."""

    def test_ranked_by_score(self, alice, players):
        results = search_players(alice, players)

        assert _ids(results) == ["bob", "carol", "dave"]
        assert [r.match_score for r in results] == [98, 59, 47]
        assert results[0].distance == pytest.approx(0.88, abs=0.05)

    def test_excludes_current_user(self, alice, players):
        assert "alice" not in _ids(search_players(alice, players))

    def test_score_ties_broken_by_distance(self, alice, players):
        skill_only = RankingWeights(1.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        results = search_players(alice, players, weights=skill_only)

        # carol and dave both score 50; carol is closer
        assert _ids(results) == ["bob", "carol", "dave"]
        assert results[1].match_score == results[2].match_score == 50

    def test_filter_skill_level(self, alice, players):
        filters = PlayerSearchFilters(skill_levels=[SkillLevel.ADVANCED])
        assert _ids(search_players(alice, players, filters)) == ["carol"]

    def test_filter_play_style(self, alice, players):
        filters = PlayerSearchFilters(play_styles=[PlayStyle.DEFENSIVE])
        assert _ids(search_players(alice, players, filters)) == ["dave"]

    def test_filter_surface_includes_any(self, alice, players):
        filters = PlayerSearchFilters(preferred_surfaces=[PreferredSurface.CLAY])
        assert _ids(search_players(alice, players, filters)) == ["carol", "dave"]

    def test_filter_availability(self, alice, players):
        filters = PlayerSearchFilters(availability=["weekday-evenings"])
        assert _ids(search_players(alice, players, filters)) == ["bob"]

    def test_filter_min_elo_excludes_unrated(self, alice, players):
        filters = PlayerSearchFilters(min_elo=1510)
        assert _ids(search_players(alice, players, filters)) == ["bob", "carol"]

    def test_filter_max_elo_keeps_unrated(self, alice, players):
        filters = PlayerSearchFilters(max_elo=1600)
        assert _ids(search_players(alice, players, filters)) == ["bob", "dave"]

    def test_filter_max_distance(self, alice, players):
        filters = PlayerSearchFilters(max_distance=10)
        assert _ids(search_players(alice, players, filters)) == ["bob", "carol"]

    def test_zero_max_distance_is_no_filter(self, alice, players):
        filters = PlayerSearchFilters(max_distance=0)
        assert _ids(search_players(alice, players, filters)) == ["bob", "carol", "dave"]

    def test_search_query_matches_bio(self, alice, players):
        filters = PlayerSearchFilters(search_query="VOLLEY")
        assert _ids(search_players(alice, players, filters)) == ["carol"]

    def test_search_query_matches_name(self, alice, players):
        filters = PlayerSearchFilters(search_query="okafor")
        assert _ids(search_players(alice, players, filters)) == ["dave"]

    def test_combined_filters(self, alice, players):
        filters = PlayerSearchFilters(
            skill_levels=[SkillLevel.INTERMEDIATE, SkillLevel.ADVANCED],
            max_distance=5,
        )
        assert _ids(search_players(alice, players, filters)) == ["bob"]

    def test_no_candidates(self, alice):
        assert search_players(alice, [alice]) == []


class TestSearchHelpers:
    """Tests for the preset searches."""

    def test_recommended(self, alice, players):
        assert _ids(get_recommended_players(alice, players)) == ["bob", "carol", "dave"]
        assert _ids(get_recommended_players(alice, players, limit=2)) == ["bob", "carol"]

    def test_nearby_default_radius(self, alice, players):
        assert _ids(get_nearby_players(alice, players)) == ["bob", "carol"]

    def test_nearby_custom_radius_and_limit(self, alice, players):
        assert _ids(get_nearby_players(alice, players, max_distance=50)) == ["bob", "carol", "dave"]
        assert _ids(get_nearby_players(alice, players, max_distance=50, limit=1)) == ["bob"]

    def test_similar_skill(self, alice, players):
        assert _ids(get_similar_skill_players(alice, players)) == ["bob", "carol", "dave"]

    def test_similar_skill_for_beginner(self, dave, players):
        # Beginner and intermediate only
        assert _ids(get_similar_skill_players(dave, players)) == ["alice", "bob"]
