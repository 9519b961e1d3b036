"""
External collaborators of the place picker core.
"""

from integrations.contracts import CatalogSource, RemoteStore, NotificationSurface
from integrations.places_api import PlacesApiClient

__all__ = [
    "CatalogSource",
    "RemoteStore",
    "NotificationSurface",
    "PlacesApiClient",
]
