"""
Elo rating calculator for recreational tennis matches.

Implements the standard Elo formula with an adaptive K factor:

  Expected score: E_A = 1 / (1 + 10^((R_B - R_A) / 400))
  Rating change:  change = round(K * (actual - expected))
  New rating:     R'_A = R_A + change

Where:
  R_A, R_B = Current ratings of players A and B
  K = Volatility factor, chosen per player (see constants.get_k_factor)
  actual = 1 for the winner, 0 for the loser

Changes are whole rating points. Rounding is half away from zero, so
when both players share a K factor the winner's gain is exactly the
loser's loss.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from tennismeet.config import settings
from tennismeet.elo.constants import (
    DIFFERENCE_DESCRIPTIONS,
    ELO_CATEGORIES,
    ELO_SPREAD,
    LARGEST_DIFFERENCE,
    LARGEST_POINT_DIFFERENTIAL,
    LOWEST_CATEGORY,
    POINT_DIFFERENTIALS,
    get_k_factor,
)


@dataclass(frozen=True)
class RatingChange:
    """One player's side of an Elo update."""
    old_elo: float
    new_elo: float
    change: int


@dataclass(frozen=True)
class EloResult:
    """
    Result of an Elo calculation.

    Contains the before/after rating and the signed change for the
    winner and the loser of a match.
    """
    winner: RatingChange
    loser: RatingChange

    @property
    def was_upset(self) -> bool:
        """Whether the lower-rated player won."""
        return self.winner.old_elo < self.loser.old_elo

    def __repr__(self) -> str:
        return (
            f"<EloResult(winner: {self.winner.old_elo:.0f} -> {self.winner.new_elo:.0f}, "
            f"loser: {self.loser.old_elo:.0f} -> {self.loser.new_elo:.0f})>"
        )


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _expected_score(rating: float, opponent_rating: float) -> float:
    """Probability that a player rated ``rating`` beats ``opponent_rating``."""
    try:
        return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / ELO_SPREAD))
    except OverflowError:
        # 10 ** x overflows only when the opponent is vastly stronger
        return 0.0


def calculate_elo_change(
    winner_rating: float,
    loser_rating: float,
    winner_matches_played: int = 0,
    loser_matches_played: int = 0,
) -> EloResult:
    """
    Calculate new Elo ratings after a match.

    A player gains more rating points for an upset (beating someone
    higher-rated) and loses more for a surprising loss. Each player gets
    their own K factor, so a new player facing an established one can
    move further than their opponent.

    New ratings are not clamped here; callers that store ratings should
    pass them through validate_elo().

    Args:
        winner_rating: Winner's rating before the match
        loser_rating: Loser's rating before the match
        winner_matches_played: Matches the winner has completed
        loser_matches_played: Matches the loser has completed

    Returns:
        EloResult with old/new ratings and changes for both players

    Example:
        result = calculate_elo_change(1500, 1500, 30, 30)
        result.winner.change   # 16
        result.loser.change    # -16
    """
    winner_k = get_k_factor(winner_rating, winner_matches_played)
    loser_k = get_k_factor(loser_rating, loser_matches_played)

    winner_expected = _expected_score(winner_rating, loser_rating)
    loser_expected = _expected_score(loser_rating, winner_rating)

    winner_change = _round_half_up(winner_k * (1 - winner_expected))
    loser_change = _round_half_up(loser_k * (0 - loser_expected))

    return EloResult(
        winner=RatingChange(
            old_elo=winner_rating,
            new_elo=winner_rating + winner_change,
            change=winner_change,
        ),
        loser=RatingChange(
            old_elo=loser_rating,
            new_elo=loser_rating + loser_change,
            change=loser_change,
        ),
    )


def calculate_win_probability(rating: float, opponent_rating: float) -> float:
    """
    Calculate the probability of a player beating an opponent.

    Symmetric: calculate_win_probability(a, b) + calculate_win_probability(b, a) == 1.

    Example:
        calculate_win_probability(1700, 1500)   # ~0.76
    """
    if rating == opponent_rating:
        return 0.5
    if rating > opponent_rating:
        return 1.0 - _expected_score(opponent_rating, rating)
    return _expected_score(rating, opponent_rating)


def rating_for_probability(target_prob: float, opponent_rating: float) -> float:
    """
    Calculate what rating you'd need for a given win probability.

    Rearranging the Elo formula:
        prob = 1 / (1 + 10^((R_B - R_A) / 400))
        R_A = R_B - 400 * log10((1 - prob) / prob)

    Probabilities at or beyond the 0/1 limits return a rating 1000
    points away from the opponent.

    Example:
        rating_for_probability(0.90, 1800)   # ~2182
    """
    if target_prob >= 1:
        return opponent_rating + 1000
    if target_prob <= 0:
        return opponent_rating - 1000

    odds_against = (1 - target_prob) / target_prob
    return round(opponent_rating - ELO_SPREAD * math.log10(odds_against), 2)


def get_elo_description(rating: float) -> str:
    """Human-readable category for a rating (lower bounds are inclusive)."""
    for lower_bound, label in ELO_CATEGORIES:
        if rating >= lower_bound:
            return label
    return LOWEST_CATEGORY


def get_elo_difference_description(difference: float) -> str:
    """Describe a rating gap between two players."""
    gap = abs(difference)
    for upper_bound, label in DIFFERENCE_DESCRIPTIONS:
        if gap < upper_bound:
            return label
    return LARGEST_DIFFERENCE


def calculate_expected_point_differential(difference: float) -> str:
    """Expected game margin per set for a rating gap."""
    gap = abs(difference)
    for upper_bound, label in POINT_DIFFERENTIALS:
        if gap < upper_bound:
            return label
    return LARGEST_POINT_DIFFERENTIAL


def validate_elo(
    rating: float,
    min_elo: Optional[int] = None,
    max_elo: Optional[int] = None,
) -> int:
    """
    Clamp a rating into the allowed range and round it to an integer.

    Args:
        rating: Raw rating
        min_elo: Lower bound (default settings.elo_min)
        max_elo: Upper bound (default settings.elo_max)

    Returns:
        Integer rating in [min_elo, max_elo], rounded half-up
    """
    low = settings.elo_min if min_elo is None else min_elo
    high = settings.elo_max if max_elo is None else max_elo

    if rating < low:
        return low
    if rating > high:
        return high
    return _round_half_up(rating)


def format_elo_change(change: int) -> str:
    """Format a rating change with its sign, e.g. '+15', '-15', '0'."""
    if change > 0:
        return f"+{change}"
    return f"{change}"


def get_elo_change_color(change: int) -> str:
    """Semantic colour category for a rating change: positive, negative or zero."""
    if change > 0:
        return "positive"
    if change < 0:
        return "negative"
    return "zero"
