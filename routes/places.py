"""
Place catalog routes.

Read-only. The catalog is small, so no pagination.
"""

from fastapi import APIRouter, Query
from typing import Optional
import structlog

from models.place import PlaceListResponse
from services.place_service import get_place_service
from exceptions import ValidationError
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Places"])


@router.get("/places", response_model=PlaceListResponse)
async def list_places(
    lat: Optional[float] = Query(None, ge=-90, le=90, description="User latitude"),
    lon: Optional[float] = Query(None, ge=-180, le=180, description="User longitude")
):
    """
    List every place.

    With lat and lon, places are sorted nearest first.

    Raises:
        422: Only one of lat / lon given
        500: Catalog file unreadable
    """
    try:
        service = get_place_service()

        if (lat is None) != (lon is None):
            raise ValidationError(
                code="LOCATION_INCOMPLETE",
                message="lat and lon must be given together",
                details={"lat": lat, "lon": lon}
            )

        if lat is not None:
            places = service.get_sorted_by_distance(lat, lon)
        else:
            places = service.get_all()

        return PlaceListResponse(places=places)

    except Exception as e:
        return handle_error(e)
