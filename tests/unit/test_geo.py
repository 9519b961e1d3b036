"""
Unit tests for distance helpers.

Run: pytest tests/unit/test_geo.py -v
"""

import pytest

from utils.geo import haversine_km, sort_places_by_distance
from tests.factories import PlaceFactory


class TestHaversine:
    """Tests for haversine_km()"""

    def test_same_point_is_zero(self):
        assert haversine_km(10.0, 20.0, 10.0, 20.0) == 0

    def test_one_degree_latitude(self):
        """One degree along a meridian is about 111 km."""
        assert haversine_km(0, 0, 1, 0) == pytest.approx(111.19, abs=0.1)

    def test_paris_to_london(self):
        distance = haversine_km(48.8566, 2.3522, 51.5074, -0.1278)

        assert distance == pytest.approx(343.5, abs=2)

    def test_symmetric(self):
        assert haversine_km(1, 2, 3, 4) == pytest.approx(haversine_km(3, 4, 1, 2))


class TestSortPlacesByDistance:
    """Tests for sort_places_by_distance()"""

    def test_nearest_first(self):
        far = PlaceFactory.build(id="far", latitude=50, longitude=50)
        near = PlaceFactory.build(id="near", latitude=1, longitude=1)
        mid = PlaceFactory.build(id="mid", latitude=10, longitude=10)

        result = sort_places_by_distance([far, near, mid], 0, 0)

        assert [p.id for p in result] == ["near", "mid", "far"]

    def test_ties_keep_input_order(self):
        a = PlaceFactory.build(id="a", latitude=5, longitude=5)
        b = PlaceFactory.build(id="b", latitude=5, longitude=5)

        assert [p.id for p in sort_places_by_distance([a, b], 0, 0)] == ["a", "b"]

    def test_does_not_modify_input(self):
        places = [
            PlaceFactory.build(id="far", latitude=50, longitude=50),
            PlaceFactory.build(id="near", latitude=1, longitude=1),
        ]

        sort_places_by_distance(places, 0, 0)

        assert [p.id for p in places] == ["far", "near"]
