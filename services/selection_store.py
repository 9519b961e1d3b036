"""
Selection store.

Single owner of the in-memory "my places" collection. Everything the
UI renders comes from current(); every change goes through replace().
"""

from typing import Callable, Optional
import structlog

from models.selection import SelectionCollection

logger = structlog.get_logger(__name__)

SelectionObserver = Callable[[SelectionCollection], None]


class SelectionStore:
    """
    Holds the current SelectionCollection and notifies observers.

    The collection is immutable, so replace() is a single reference
    swap and readers never see a partially applied change. No
    validation happens here.
    """

    def __init__(self, initial: Optional[SelectionCollection] = None):
        self._collection = initial if initial is not None else SelectionCollection()
        self._observers: list[SelectionObserver] = []

    def current(self) -> SelectionCollection:
        return self._collection

    def replace(self, next_collection: SelectionCollection) -> None:
        """
        Swap in next_collection and notify observers.

        Always succeeds. An observer that raises is logged and skipped;
        the swap has already happened.
        """
        previous = self._collection
        self._collection = next_collection

        logger.debug(
            "selection_replaced",
            previous_count=len(previous),
            count=len(next_collection),
            ids=next_collection.ids
        )

        for observer in list(self._observers):
            try:
                observer(next_collection)
            except Exception as e:
                logger.error(
                    "selection_observer_failed",
                    observer=getattr(observer, "__qualname__", repr(observer)),
                    error=str(e),
                    error_type=type(e).__name__
                )

    def subscribe(self, observer: SelectionObserver) -> Callable[[], None]:
        """
        Register observer for change notifications.

        Returns:
            Callable that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe
