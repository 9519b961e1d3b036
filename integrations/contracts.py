"""
Collaborator contracts for the place picker core.

The sync engine and the picker session only talk to these
interfaces:
- CatalogSource: read-only list of places
- RemoteStore: read / replace the user's selection
- NotificationSurface: show / dismiss a failure message

integrations/places_api.py implements the first two over HTTP,
services/notification_service.py implements the third.
"""

from abc import ABC, abstractmethod

from models.place import Place
from models.selection import SelectionCollection
from models.transaction import TransactionError


class CatalogSource(ABC):
    """Source of the places a user can pick from."""

    @abstractmethod
    async def list_items(self) -> list[Place]:
        """Return every place. Raises FetchError on failure."""


class RemoteStore(ABC):
    """Server-side copy of the user's selection."""

    @abstractmethod
    async def read_selection(self) -> SelectionCollection:
        """Return the stored selection. Raises FetchError on failure."""

    @abstractmethod
    async def replace_selection(self, next_collection: SelectionCollection) -> str:
        """
        Replace the whole stored selection with next_collection.

        Returns the confirmation message. Raises NetworkFailure or
        RemoteRejected on failure.
        """


class NotificationSurface(ABC):
    """Dismissible error display."""

    @abstractmethod
    def show(self, error: TransactionError) -> None:
        """Display error."""

    @abstractmethod
    def dismiss(self) -> None:
        """Clear the displayed error."""
