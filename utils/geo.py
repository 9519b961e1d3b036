"""
Distance helpers for ordering places around the user.

Used by the catalog endpoint and the picker session when a
location is known.
"""

import math
from typing import Iterable

from models.place import Place

EARTH_RADIUS_KM = 6371.0


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points.

    Args:
        lat1, lon1: First point in degrees
        lat2, lon2: Second point in degrees

    Returns:
        Distance in kilometers
    """
    d_lat = to_radians(lat2 - lat1)
    d_lon = to_radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(to_radians(lat1)) * math.cos(to_radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def sort_places_by_distance(places: Iterable[Place], lat: float, lon: float) -> list[Place]:
    """
    Sort places nearest first.

    Returns a new list; ties keep their catalog order.
    """
    return sorted(
        places,
        key=lambda place: haversine_km(lat, lon, place.latitude, place.longitude)
    )
