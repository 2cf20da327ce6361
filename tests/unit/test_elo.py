"""
Unit tests for the Elo calculator.

Tests the core Elo calculation logic to ensure:
- Favorites winning gain less than underdogs winning
- Rating changes balance when both players share a K factor
- Experience and rating select the right K factor
- Helpers (probabilities, descriptions, clamping) behave at their edges
"""

import pytest

from tennismeet.elo import (
    calculate_elo_change,
    calculate_expected_point_differential,
    calculate_win_probability,
    format_elo_change,
    get_elo_change_color,
    get_elo_description,
    get_elo_difference_description,
    get_k_factor,
    rating_for_probability,
    validate_elo,
)


class TestCalculateEloChange:
    """Tests for calculate_elo_change()."""

    def test_equal_ratings(self):
        """Equal established players split K evenly."""
        result = calculate_elo_change(1500, 1500, 30, 30)

        assert result.winner.change == 16
        assert result.loser.change == -16
        assert result.winner.new_elo == 1516
        assert result.loser.new_elo == 1484

    def test_underdog_wins(self):
        """
        Beating a higher-rated player earns most of K.

        1400 vs 1800: the underdog was expected to win ~9% of the time.
        """
        result = calculate_elo_change(1400, 1800, 30, 30)

        assert result.winner.change == 29
        assert result.loser.change == -29
        assert result.was_upset

    def test_favorite_wins(self):
        """The favorite winning moves ratings only a little."""
        result = calculate_elo_change(1800, 1400, 30, 30)

        assert result.winner.change == 3
        assert result.loser.change == -3
        assert not result.was_upset

    def test_underdog_gains_more_than_favorite(self):
        upset = calculate_elo_change(1600, 1800, 50, 50)
        expected = calculate_elo_change(1800, 1600, 50, 50)

        assert upset.winner.change > expected.winner.change

    def test_zero_sum_with_shared_k(self):
        """
        With the same K on both sides, the winner's gain is the loser's loss.

        Half-up rounding is symmetric, so this holds exactly.
        """
        for winner, loser in [(1700, 1650), (1234, 1987), (2000, 1999), (1500, 1000)]:
            result = calculate_elo_change(winner, loser, 50, 50)
            assert result.winner.change + result.loser.change == 0

    def test_new_player_uses_higher_k(self):
        """A new player (K=40) moves further than an established one (K=32)."""
        result = calculate_elo_change(1500, 1500, 10, 100)

        assert result.winner.change == 20
        assert result.loser.change == -16

    def test_elite_players(self):
        result = calculate_elo_change(2500, 2400, 100, 100)

        assert result.winner.change == 6
        assert result.loser.change == -6

    def test_extreme_upset(self):
        """Each side uses its own K: 40 for the new winner, 24 for the strong loser."""
        result = calculate_elo_change(1100, 2200, 20, 150)

        assert result.winner.change == 40
        assert result.loser.change == -24

    def test_winner_never_loses_points(self):
        result = calculate_elo_change(3000, 100, 100, 100)

        assert result.winner.change >= 0
        assert result.loser.change <= 0

    def test_defaults_treat_players_as_new(self):
        result = calculate_elo_change(1500, 1500)

        assert result.winner.change == 20


class TestKFactor:
    """Tests for get_k_factor()."""

    @pytest.mark.parametrize(
        "rating,matches,expected",
        [
            (1500, 0, 40),
            (2600, 29, 40),
            (1500, 30, 32),
            (2099, 100, 32),
            (2100, 100, 24),
            (2399, 100, 24),
            (2400, 100, 16),
        ],
    )
    def test_k_factor_bands(self, rating, matches, expected):
        assert get_k_factor(rating, matches) == expected


class TestWinProbability:
    """Tests for calculate_win_probability() and rating_for_probability()."""

    def test_equal_ratings_is_even(self):
        assert calculate_win_probability(1500, 1500) == 0.5

    def test_higher_rating_favoured(self):
        assert calculate_win_probability(1700, 1500) == pytest.approx(0.7597, abs=1e-4)

    def test_probabilities_are_complementary(self):
        for a, b in [(1700, 1500), (1234, 2345), (100, 3000)]:
            assert calculate_win_probability(a, b) + calculate_win_probability(b, a) == 1.0

    def test_rating_for_even_odds_is_opponent_rating(self):
        assert rating_for_probability(0.5, 1500) == pytest.approx(1500)

    def test_rating_for_ninety_percent(self):
        assert rating_for_probability(0.9, 1800) == pytest.approx(2181.7, abs=0.1)

    def test_rating_for_probability_limits(self):
        assert rating_for_probability(1.0, 1500) == 2500
        assert rating_for_probability(0.0, 1500) == 500

    def test_round_trip(self):
        needed = rating_for_probability(0.75, 1600)
        assert calculate_win_probability(needed, 1600) == pytest.approx(0.75, abs=1e-4)


class TestDescriptions:
    """Tests for the human-readable helpers."""

    @pytest.mark.parametrize(
        "rating,label",
        [
            (2400, "Elite Professional"),
            (2399, "Professional"),
            (1800, "Advanced"),
            (1799, "Intermediate+"),
            (1500, "Intermediate"),
            (1200, "Beginner+"),
            (1000, "Beginner"),
            (999, "Novice"),
        ],
    )
    def test_elo_description(self, rating, label):
        assert get_elo_description(rating) == label

    def test_difference_description(self):
        assert get_elo_difference_description(20) == "Evenly matched"
        assert get_elo_difference_description(-75) == "Slight advantage"
        assert get_elo_difference_description(300) == "Overwhelming advantage"

    def test_point_differential(self):
        assert calculate_expected_point_differential(10) == "±1-2 games per set"
        assert calculate_expected_point_differential(250) == "±4-5 games per set"
        assert calculate_expected_point_differential(1000) == "±5+ games per set"

    def test_format_elo_change(self):
        assert format_elo_change(15) == "+15"
        assert format_elo_change(-15) == "-15"
        assert format_elo_change(0) == "0"

    def test_change_color(self):
        assert get_elo_change_color(5) == "positive"
        assert get_elo_change_color(-5) == "negative"
        assert get_elo_change_color(0) == "zero"


class TestValidateElo:
    """Tests for validate_elo()."""

    def test_clamps_to_default_bounds(self):
        assert validate_elo(50) == 100
        assert validate_elo(3500) == 3000

    def test_rounds_half_up(self):
        assert validate_elo(1500.5) == 1501
        assert validate_elo(1500.4) == 1500

    def test_custom_bounds(self):
        assert validate_elo(900, min_elo=1000, max_elo=2000) == 1000
        assert validate_elo(2100, min_elo=1000, max_elo=2000) == 2000
