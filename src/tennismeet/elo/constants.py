"""
Elo rating system constants.

K factor: Controls rating volatility (how much ratings change per match)
  - Higher K = bigger rating swings
  - Lower K = more stable ratings

Spread: Controls how rating differences translate to win probability.
TennisMeet uses the classic chess spread of 400 points: a 400 point gap
means the stronger player is expected to win ten times out of eleven.

Recreational players have far fewer matches than touring pros, so the
K factor depends on experience first and rating second:
- New players (< 30 matches) move fastest while their rating settles
- Established club players use the standard chess K of 32
- Strong players (2100-2400) move slower
- Elite players (2400+) move slowest
"""

# Logistic spread used by the expected-score formula
ELO_SPREAD = 400

# Matches a player needs before they count as established
NEW_PLAYER_MATCH_THRESHOLD = 30

# K factors
K_NEW_PLAYER = 40
K_STANDARD = 32
K_STRONG = 24
K_ELITE = 16

# Rating thresholds for the K factor bands
STRONG_RATING_THRESHOLD = 2100
ELITE_RATING_THRESHOLD = 2400

# Rating category labels, highest first.
# Each entry is (inclusive lower bound, label).
ELO_CATEGORIES: tuple[tuple[int, str], ...] = (
    (2400, "Elite Professional"),
    (2200, "Professional"),
    (2000, "Expert"),
    (1800, "Advanced"),
    (1600, "Intermediate+"),
    (1400, "Intermediate"),
    (1200, "Beginner+"),
    (1000, "Beginner"),
)
LOWEST_CATEGORY = "Novice"

# Rating gap descriptions, smallest first.
# Each entry is (exclusive upper bound, label).
DIFFERENCE_DESCRIPTIONS: tuple[tuple[int, str], ...] = (
    (50, "Evenly matched"),
    (100, "Slight advantage"),
    (200, "Clear advantage"),
    (300, "Strong advantage"),
)
LARGEST_DIFFERENCE = "Overwhelming advantage"

# Expected game margin per set for a given rating gap, smallest first.
POINT_DIFFERENTIALS: tuple[tuple[int, str], ...] = (
    (50, "±1-2 games per set"),
    (100, "±2-3 games per set"),
    (200, "±3-4 games per set"),
    (300, "±4-5 games per set"),
)
LARGEST_POINT_DIFFERENTIAL = "±5+ games per set"


def get_k_factor(rating: float, matches_played: int) -> int:
    """
    Get the K factor for a player.

    Args:
        rating: Player's current rating
        matches_played: Number of matches the player has completed

    Returns:
        K factor to use for this player's rating update

    Example:
        get_k_factor(1500, 10)    # 40, still a new player
        get_k_factor(1500, 100)   # 32
        get_k_factor(2250, 100)   # 24
        get_k_factor(2450, 100)   # 16
    """
    if matches_played < NEW_PLAYER_MATCH_THRESHOLD:
        return K_NEW_PLAYER
    if rating < STRONG_RATING_THRESHOLD:
        return K_STANDARD
    if rating >= ELITE_RATING_THRESHOLD:
        return K_ELITE
    return K_STRONG
