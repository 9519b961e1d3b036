"""
Business logic services.

Backend side: place catalog and stored user places.
Client side: selection store, sync engine, notification slot and
the picker session that wires them together.
"""

from services.place_service import PlaceService, get_place_service
from services.user_place_service import UserPlaceService, get_user_place_service
from services.selection_store import SelectionStore
from services.sync_engine import SyncEngine, Transaction, DEFAULT_FAILURE_MESSAGE
from services.notification_service import NotificationSlot
from services.place_picker_service import PlacePickerSession, ViewStatus

__all__ = [
    "PlaceService",
    "get_place_service",
    "UserPlaceService",
    "get_user_place_service",
    "SelectionStore",
    "SyncEngine",
    "Transaction",
    "DEFAULT_FAILURE_MESSAGE",
    "NotificationSlot",
    "PlacePickerSession",
    "ViewStatus",
]
