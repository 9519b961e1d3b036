"""
Utility helpers.
"""

from utils.geo import haversine_km, sort_places_by_distance

__all__ = [
    "haversine_km",
    "sort_places_by_distance",
]
