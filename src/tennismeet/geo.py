"""
Great-circle distance helpers.

Player search works in miles and court search in kilometres, so the
haversine formula is exposed with an explicit unit.
"""

import math

EARTH_RADIUS_MILES = 3959.0
EARTH_RADIUS_KM = 6371.0

_RADIUS_BY_UNIT = {
    "mi": EARTH_RADIUS_MILES,
    "km": EARTH_RADIUS_KM,
}


def haversine_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    unit: str = "mi",
) -> float:
    """
    Great-circle distance between two coordinates.

    Args:
        lat1, lon1: First point in decimal degrees
        lat2, lon2: Second point in decimal degrees
        unit: 'mi' for miles or 'km' for kilometres

    Returns:
        Distance in the requested unit

    Raises:
        ValueError: If unit is not 'mi' or 'km'
    """
    try:
        radius = _RADIUS_BY_UNIT[unit]
    except KeyError as exc:
        raise ValueError(f"unit must be 'mi' or 'km', got '{unit}'") from exc

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius * c


def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in miles."""
    return haversine_distance(lat1, lon1, lat2, lon2, unit="mi")


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometres."""
    return haversine_distance(lat1, lon1, lat2, lon2, unit="km")
