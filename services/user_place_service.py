"""
User places service.

Persists the user's selected place ids. Every write replaces the
whole stored selection atomically; there is no partial update.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional
import structlog

from config import settings
from models.selection import find_duplicates
from services.place_service import PlaceService, get_place_service
from exceptions import StorageError, UnknownPlaceError, DuplicatePlaceIdError

logger = structlog.get_logger(__name__)

UPDATE_CONFIRMATION = "User places updated."


class UserPlaceService:
    """
    Selected places storage.

    File format: {"places": ["id", ...]}, most recent first.
    A missing file is an empty selection.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        place_service: Optional[PlaceService] = None
    ):
        self.path = path or settings.user_places_path
        self.place_service = place_service or get_place_service()
        self._lock = threading.Lock()

    def get_ids(self) -> list[str]:
        """
        Get selected place ids.

        Raises:
            StorageError: If the file exists but cannot be read
        """
        if not self.path.exists():
            logger.debug("user_places_file_missing", path=str(self.path))
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("read_user_places_failed", path=str(self.path), error=str(e))
            raise StorageError("read", str(e), details={"path": str(self.path)}) from e

        ids = raw.get("places", []) if isinstance(raw, dict) else raw
        if not isinstance(ids, list):
            logger.error("invalid_user_places_file", path=str(self.path), places_type=type(ids).__name__)
            raise StorageError(
                "parse",
                f"expected a list of place ids, got {type(ids).__name__}",
                details={"path": str(self.path)}
            )
        return [str(place_id) for place_id in ids]

    def replace(self, place_ids: list[str]) -> str:
        """
        Replace the stored selection.

        Args:
            place_ids: Full new selection, most recent first

        Returns:
            Confirmation message

        Raises:
            DuplicatePlaceIdError: If an id appears twice
            UnknownPlaceError: If an id is not in the catalog
            StorageError: If the write fails
        """
        duplicates = find_duplicates(place_ids)
        if duplicates:
            raise DuplicatePlaceIdError(duplicates)

        known = self.place_service.known_ids()
        unknown = [place_id for place_id in place_ids if place_id not in known]
        if unknown:
            raise UnknownPlaceError(unknown)

        logger.info("replacing_user_places", count=len(place_ids))

        with self._lock:
            self._write(place_ids)

        logger.info("user_places_replaced", ids=place_ids)
        return UPDATE_CONFIRMATION

    def _write(self, place_ids: list[str]) -> None:
        # Write to a sibling temp file, then swap it in.
        payload = json.dumps({"places": place_ids}, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("write_user_places_failed", path=str(self.path), error=str(e))
            raise StorageError("write", str(e), details={"path": str(self.path)}) from e


# Singleton instance
_user_place_service: Optional[UserPlaceService] = None


def get_user_place_service() -> UserPlaceService:
    """Get or create UserPlaceService instance."""
    global _user_place_service
    if _user_place_service is None:
        _user_place_service = UserPlaceService()
    return _user_place_service
