"""
Elo rating system module.

Implements recreational-tennis Elo calculations with:
- Experience and rating dependent K factor
- Symmetric win probabilities on the classic 400 point spread
- Rating clamping and human-readable rating categories
"""

from tennismeet.elo.calculator import (
    EloResult,
    RatingChange,
    calculate_elo_change,
    calculate_expected_point_differential,
    calculate_win_probability,
    format_elo_change,
    get_elo_change_color,
    get_elo_description,
    get_elo_difference_description,
    rating_for_probability,
    validate_elo,
)
from tennismeet.elo.constants import get_k_factor

__all__ = [
    "EloResult",
    "RatingChange",
    "calculate_elo_change",
    "calculate_expected_point_differential",
    "calculate_win_probability",
    "format_elo_change",
    "get_elo_change_color",
    "get_elo_description",
    "get_elo_difference_description",
    "get_k_factor",
    "rating_for_probability",
    "validate_elo",
]
