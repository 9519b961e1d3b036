"""
Selection models.

SelectionCollection is the user's ordered, duplicate-free list of
picked places, most recent first. The UserPlaces* schemas are the
wire format of the /user-places endpoints (ids only).
"""

from typing import Iterable, Optional
from pydantic import Field, field_validator

from models.base import BaseSchema, FrozenSchema
from models.place import Place


def find_duplicates(ids: Iterable[str]) -> list[str]:
    """Return ids that occur more than once, in first-seen order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for place_id in ids:
        if place_id in seen and place_id not in duplicates:
            duplicates.append(place_id)
        seen.add(place_id)
    return duplicates


class SelectionCollection(FrozenSchema):
    """
    Immutable ordered collection of selected places.

    Transitions return new instances, so any instance can be kept
    as a snapshot.
    """

    places: tuple[Place, ...] = ()

    @field_validator("places")
    @classmethod
    def ids_must_be_unique(cls, places: tuple[Place, ...]) -> tuple[Place, ...]:
        duplicates = find_duplicates(place.id for place in places)
        if duplicates:
            raise ValueError(f"duplicate place ids: {', '.join(duplicates)}")
        return places

    @classmethod
    def of(cls, places: Iterable[Place]) -> "SelectionCollection":
        return cls(places=tuple(places))

    @property
    def ids(self) -> list[str]:
        return [place.id for place in self.places]

    def __len__(self) -> int:
        return len(self.places)

    def contains(self, place_id: str) -> bool:
        return any(place.id == place_id for place in self.places)

    def get(self, place_id: str) -> Optional[Place]:
        for place in self.places:
            if place.id == place_id:
                return place
        return None

    def with_added(self, place: Place) -> "SelectionCollection":
        """Prepend place; unchanged when its id is already selected."""
        if self.contains(place.id):
            return self
        return SelectionCollection(places=(place, *self.places))

    def without(self, place_id: str) -> "SelectionCollection":
        """Drop place_id; unchanged when it is not selected."""
        if not self.contains(place_id):
            return self
        return SelectionCollection(
            places=tuple(place for place in self.places if place.id != place_id)
        )


# ===================
# WIRE SCHEMAS
# ===================

class UserPlacesUpdate(BaseSchema):
    """PUT /user-places body: the full replacement selection."""

    places: list[str] = Field(..., description="Selected place ids, most recent first")


class UserPlacesResponse(BaseSchema):
    """GET /user-places response."""

    places: list[str] = Field(default_factory=list)


class UpdateConfirmation(BaseSchema):
    """PUT /user-places response."""

    message: str
