"""
Place models.

A place is one catalog entry the user can pick. Places are immutable
once loaded from the catalog.
"""

from pydantic import Field

from models.base import BaseSchema, FrozenSchema


class PlaceImage(FrozenSchema):
    """Reference to the place's picture."""

    src: str = Field(..., min_length=1, description="Image path or URL")
    alt: str = Field("", description="Alternative text")


class Place(FrozenSchema):
    """A catalog place."""

    id: str = Field(..., min_length=1, description="Place id")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field("", description="Short description")
    image: PlaceImage = Field(..., description="Picture reference")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")


class PlaceListResponse(BaseSchema):
    """Catalog response."""

    places: list[Place]
