"""
Unit tests for PlaceService.

Run: pytest tests/unit/test_place_service.py -v
"""

import json
import pytest

from services.place_service import PlaceService
from exceptions import PlaceNotFoundError, StorageError
from tests.factories import PlaceFactory


class TestPlaceServiceGetAll:
    """Tests for PlaceService.get_all()"""

    def test_get_all_in_catalog_order(self, place_service):
        places = place_service.get_all()

        assert [p.id for p in places] == ["p1", "p2", "p3"]

    def test_accepts_bare_list_file(self, tmp_path):
        """Catalog file may be a plain list."""
        path = tmp_path / "places.json"
        path.write_text(json.dumps(PlaceFactory.create_batch(2)), encoding="utf-8")

        places = PlaceService(path=path).get_all()

        assert [p.id for p in places] == ["place-1", "place-2"]

    def test_caches_catalog(self, place_service, data_dir):
        """Second read should not hit the file."""
        place_service.get_all()
        (data_dir / "places.json").write_text("[]", encoding="utf-8")

        assert len(place_service.get_all()) == 3

    def test_reload_reads_file_again(self, place_service, data_dir):
        place_service.get_all()
        (data_dir / "places.json").write_text("[]", encoding="utf-8")

        place_service.reload()

        assert place_service.get_all() == []

    def test_returns_copy(self, place_service):
        place_service.get_all().clear()

        assert len(place_service.get_all()) == 3

    def test_missing_file_raises_storage_error(self, tmp_path):
        service = PlaceService(path=tmp_path / "nope.json")

        with pytest.raises(StorageError) as exc_info:
            service.get_all()

        assert exc_info.value.status_code == 500
        assert exc_info.value.details["operation"] == "read"

    def test_invalid_json_raises_storage_error(self, tmp_path):
        path = tmp_path / "places.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            PlaceService(path=path).get_all()

    def test_invalid_place_raises_storage_error(self, tmp_path):
        path = tmp_path / "places.json"
        path.write_text(json.dumps({"places": [{"id": "x"}]}), encoding="utf-8")

        with pytest.raises(StorageError) as exc_info:
            PlaceService(path=path).get_all()

        assert exc_info.value.details["operation"] == "parse"

    def test_places_not_a_list_raises_storage_error(self, tmp_path):
        path = tmp_path / "places.json"
        path.write_text(json.dumps({"places": "p1"}), encoding="utf-8")

        with pytest.raises(StorageError) as exc_info:
            PlaceService(path=path).get_all()

        assert exc_info.value.details["operation"] == "parse"


class TestPlaceServiceLookup:
    """Tests for get_by_id() / known_ids() / get_sorted_by_distance()"""

    def test_get_by_id(self, place_service):
        place = place_service.get_by_id("p2")

        assert place.name == "Sahara Desert Dunes"

    def test_get_by_id_not_found(self, place_service):
        with pytest.raises(PlaceNotFoundError) as exc_info:
            place_service.get_by_id("nope")

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "PLACE_NOT_FOUND"

    def test_known_ids(self, place_service):
        assert place_service.known_ids() == {"p1", "p2", "p3"}

    def test_sorted_by_distance(self, place_service):
        # Toronto: Ontario waterfall is nearest
        places = place_service.get_sorted_by_distance(43.6532, -79.3832)

        assert places[0].id == "p1"
