"""
Place picker session.

Composes the catalog, the selection store, the sync engine and the
notification slot into what a view needs:

- load() once; a FetchError puts the whole view into an error state
- select_place() / remove_place() run optimistic transactions
- a failed transaction leaves a dismissible error, nothing else blocks
"""

from enum import Enum
from typing import Optional
import structlog

from models.place import Place
from models.selection import SelectionCollection
from models.transaction import TransactionError
from integrations.contracts import CatalogSource, RemoteStore
from services.selection_store import SelectionStore
from services.notification_service import NotificationSlot
from services.sync_engine import SyncEngine, Transaction
from exceptions import FetchError, PlaceNotFoundError, SessionNotReadyError
from utils.geo import sort_places_by_distance

logger = structlog.get_logger(__name__)


class ViewStatus(str, Enum):
    """Lifecycle of the picker view."""
    LOADING = "LOADING"
    READY = "READY"
    ERROR = "ERROR"


class PlacePickerSession:
    """
    One user's picker view.

    The catalog and the remote store are usually the same
    PlacesApiClient; tests pass separate fakes.
    """

    def __init__(
        self,
        catalog: CatalogSource,
        remote: RemoteStore,
        store: Optional[SelectionStore] = None,
        notifications: Optional[NotificationSlot] = None
    ):
        self.catalog = catalog
        self.remote = remote
        self.store = store or SelectionStore()
        self.notifications = notifications or NotificationSlot()
        self.engine = SyncEngine(self.store, remote, self.notifications)

        self.status = ViewStatus.LOADING
        self.load_error: Optional[str] = None
        self._places: list[Place] = []

    async def load(self) -> ViewStatus:
        """
        Fetch the catalog and the stored selection.

        Returns:
            READY on success, ERROR if either fetch failed
        """
        logger.info("loading_place_picker")

        try:
            self._places = await self.catalog.list_items()
            initial = await self.remote.read_selection()
        except FetchError as e:
            self.status = ViewStatus.ERROR
            self.load_error = e.message
            logger.error("place_picker_load_failed", error=e.message, details=e.details)
            return self.status

        self.store.replace(initial)
        self.status = ViewStatus.READY
        self.load_error = None

        logger.info(
            "place_picker_loaded",
            places=len(self._places),
            selected=len(initial)
        )
        return self.status

    # ===================
    # READ
    # ===================

    def available_places(
        self,
        lat: Optional[float] = None,
        lon: Optional[float] = None
    ) -> list[Place]:
        """Catalog places, nearest first when a location is given."""
        self._require_ready()
        if lat is None or lon is None:
            return list(self._places)
        return sort_places_by_distance(self._places, lat, lon)

    @property
    def selected_places(self) -> SelectionCollection:
        return self.store.current()

    @property
    def error(self) -> Optional[TransactionError]:
        return self.notifications.error

    # ===================
    # ACTIONS
    # ===================

    async def select_place(self, place_id: str) -> Transaction:
        """
        Add a catalog place to the selection.

        Raises:
            SessionNotReadyError: If load() has not succeeded
            PlaceNotFoundError: If place_id is not in the catalog
        """
        self._require_ready()
        place = self._find(place_id)
        return await self.engine.add(place)

    async def remove_place(self, place_id: str) -> Transaction:
        """
        Remove a place from the selection.

        Raises:
            SessionNotReadyError: If load() has not succeeded
        """
        self._require_ready()
        return await self.engine.remove(place_id)

    def dismiss_error(self) -> None:
        self.notifications.dismiss()

    def _find(self, place_id: str) -> Place:
        for place in self._places:
            if place.id == place_id:
                return place
        raise PlaceNotFoundError(place_id)

    def _require_ready(self) -> None:
        if self.status != ViewStatus.READY:
            raise SessionNotReadyError(self.status.value)
