"""
User places routes.

The selection travels as a list of place ids. PUT replaces the whole
stored selection; there is no per-item add or delete.
"""

from fastapi import APIRouter
import structlog

from models.selection import UserPlacesUpdate, UserPlacesResponse, UpdateConfirmation
from services.user_place_service import get_user_place_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["User Places"])


@router.get("/user-places", response_model=UserPlacesResponse)
async def get_user_places():
    """
    Get the selected place ids, most recent first.

    Raises:
        500: Storage unreadable
    """
    try:
        service = get_user_place_service()
        return UserPlacesResponse(places=service.get_ids())

    except Exception as e:
        return handle_error(e)


@router.put("/user-places", response_model=UpdateConfirmation)
async def replace_user_places(data: UserPlacesUpdate):
    """
    Replace the selected place ids.

    Raises:
        409: Duplicate ids
        422: Unknown ids
        500: Storage write failed
    """
    try:
        service = get_user_place_service()
        message = service.replace(data.places)
        return UpdateConfirmation(message=message)

    except Exception as e:
        return handle_error(e)
