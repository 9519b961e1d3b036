"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.places import router as places_router
from routes.user_places import router as user_places_router

__all__ = [
    "places_router",
    "user_places_router",
]
