"""
Place catalog service.

Reads the read-only place catalog from a JSON data file.
"""

import json
from pathlib import Path
from typing import Optional
import structlog
from pydantic import ValidationError as PydanticValidationError

from config import settings
from models.place import Place
from exceptions import StorageError, PlaceNotFoundError
from utils.geo import sort_places_by_distance

logger = structlog.get_logger(__name__)


class PlaceService:
    """
    Place catalog service.

    The catalog file holds either {"places": [...]} or a bare list.
    It is read once and cached for the lifetime of the instance.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path or settings.places_path
        self._places: Optional[list[Place]] = None

    def get_all(self) -> list[Place]:
        """
        Get every place in catalog order.

        Returns:
            List of Place

        Raises:
            StorageError: If the catalog file is missing or invalid
        """
        if self._places is None:
            self._places = self._load()
        return list(self._places)

    def get_sorted_by_distance(self, lat: float, lon: float) -> list[Place]:
        """Get every place, nearest to (lat, lon) first."""
        logger.debug("sorting_places_by_distance", lat=lat, lon=lon)
        return sort_places_by_distance(self.get_all(), lat, lon)

    def get_by_id(self, place_id: str) -> Place:
        """
        Get a single place.

        Raises:
            PlaceNotFoundError: If the id is not in the catalog
        """
        for place in self.get_all():
            if place.id == place_id:
                return place
        raise PlaceNotFoundError(place_id)

    def known_ids(self) -> set[str]:
        return {place.id for place in self.get_all()}

    def reload(self) -> None:
        """Drop the cached catalog so the next read hits the file."""
        self._places = None
        logger.info("place_catalog_reset", path=str(self.path))

    def _load(self) -> list[Place]:
        logger.info("loading_place_catalog", path=str(self.path))

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("load_place_catalog_failed", path=str(self.path), error=str(e))
            raise StorageError("read", str(e), details={"path": str(self.path)}) from e

        rows = raw.get("places", []) if isinstance(raw, dict) else raw
        if not isinstance(rows, list):
            logger.error("invalid_place_catalog", path=str(self.path), places_type=type(rows).__name__)
            raise StorageError(
                "parse",
                f"expected a list of places, got {type(rows).__name__}",
                details={"path": str(self.path)}
            )

        try:
            places = [Place.model_validate(row) for row in rows]
        except (PydanticValidationError, TypeError) as e:
            logger.error("invalid_place_catalog", path=str(self.path), error=str(e))
            raise StorageError("parse", str(e), details={"path": str(self.path)}) from e

        logger.info("place_catalog_loaded", count=len(places))
        return places


# Singleton instance
_place_service: Optional[PlaceService] = None


def get_place_service() -> PlaceService:
    """Get or create PlaceService instance."""
    global _place_service
    if _place_service is None:
        _place_service = PlaceService()
    return _place_service
