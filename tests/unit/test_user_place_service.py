"""
Unit tests for UserPlaceService.

Run: pytest tests/unit/test_user_place_service.py -v
"""

import json
import pytest
from unittest.mock import patch

from services.user_place_service import UserPlaceService, UPDATE_CONFIRMATION
from exceptions import DuplicatePlaceIdError, StorageError, UnknownPlaceError


class TestUserPlaceServiceRead:
    """Tests for UserPlaceService.get_ids()"""

    def test_empty_file(self, user_place_service):
        assert user_place_service.get_ids() == []

    def test_missing_file_is_empty(self, tmp_path, place_service):
        service = UserPlaceService(path=tmp_path / "none.json", place_service=place_service)

        assert service.get_ids() == []

    def test_reads_ids_in_order(self, user_place_service, data_dir):
        (data_dir / "user-places.json").write_text(
            json.dumps({"places": ["p3", "p1"]}), encoding="utf-8"
        )

        assert user_place_service.get_ids() == ["p3", "p1"]

    def test_corrupt_file_raises_storage_error(self, user_place_service, data_dir):
        (data_dir / "user-places.json").write_text("{oops", encoding="utf-8")

        with pytest.raises(StorageError):
            user_place_service.get_ids()

    def test_places_not_a_list_raises_storage_error(self, user_place_service, data_dir):
        (data_dir / "user-places.json").write_text(
            json.dumps({"places": "p1"}), encoding="utf-8"
        )

        with pytest.raises(StorageError) as exc_info:
            user_place_service.get_ids()

        assert exc_info.value.details["operation"] == "parse"


class TestUserPlaceServiceReplace:
    """Tests for UserPlaceService.replace()"""

    def test_replace_persists_whole_selection(self, user_place_service, data_dir):
        message = user_place_service.replace(["p2", "p1"])

        assert message == UPDATE_CONFIRMATION
        stored = json.loads((data_dir / "user-places.json").read_text(encoding="utf-8"))
        assert stored == {"places": ["p2", "p1"]}

    def test_replace_overwrites_previous(self, user_place_service):
        user_place_service.replace(["p1", "p2", "p3"])

        user_place_service.replace(["p3"])

        assert user_place_service.get_ids() == ["p3"]

    def test_replace_with_empty_list(self, user_place_service):
        user_place_service.replace(["p1"])

        user_place_service.replace([])

        assert user_place_service.get_ids() == []

    def test_duplicate_ids_rejected(self, user_place_service):
        with pytest.raises(DuplicatePlaceIdError) as exc_info:
            user_place_service.replace(["p1", "p1"])

        assert exc_info.value.status_code == 409
        assert exc_info.value.details == {"duplicate_ids": ["p1"]}

    def test_unknown_ids_rejected(self, user_place_service):
        with pytest.raises(UnknownPlaceError) as exc_info:
            user_place_service.replace(["p1", "ghost"])

        assert exc_info.value.status_code == 422
        assert exc_info.value.details == {"unknown_ids": ["ghost"]}

    def test_rejected_replace_keeps_stored_selection(self, user_place_service):
        user_place_service.replace(["p1"])

        with pytest.raises(UnknownPlaceError):
            user_place_service.replace(["ghost"])

        assert user_place_service.get_ids() == ["p1"]

    def test_failed_write_keeps_stored_selection(self, user_place_service, data_dir):
        """A failing swap leaves the old file and no temp files behind."""
        user_place_service.replace(["p1"])

        with patch("services.user_place_service.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError) as exc_info:
                user_place_service.replace(["p2"])

        assert exc_info.value.details["operation"] == "write"
        assert user_place_service.get_ids() == ["p1"]
        assert sorted(p.name for p in data_dir.iterdir()) == ["places.json", "user-places.json"]

    def test_creates_missing_directory(self, tmp_path, place_service):
        path = tmp_path / "nested" / "user-places.json"
        service = UserPlaceService(path=path, place_service=place_service)

        service.replace(["p2"])

        assert service.get_ids() == ["p2"]
