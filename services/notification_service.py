"""
Notification slot.

Holds the one failure message the user has not acknowledged yet.
Dismissing it changes nothing else: rollback already happened when
the failure occurred.
"""

from typing import Callable, Optional
import structlog

from models.transaction import TransactionError
from integrations.contracts import NotificationSurface

logger = structlog.get_logger(__name__)

NotificationObserver = Callable[[Optional[TransactionError]], None]


class NotificationSlot(NotificationSurface):
    """
    In-memory NotificationSurface.

    show() replaces whatever is displayed; observers receive the new
    error, or None on dismiss. An observer that raises is logged and
    skipped.
    """

    def __init__(self):
        self._error: Optional[TransactionError] = None
        self._observers: list[NotificationObserver] = []

    @property
    def error(self) -> Optional[TransactionError]:
        return self._error

    @property
    def visible(self) -> bool:
        return self._error is not None

    def show(self, error: TransactionError) -> None:
        logger.warning("notification_shown", message=error.message)
        self._error = error
        self._notify()

    def dismiss(self) -> None:
        if self._error is None:
            return
        logger.info("notification_dismissed", message=self._error.message)
        self._error = None
        self._notify()

    def subscribe(self, observer: NotificationObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self._error)
            except Exception as e:
                logger.error(
                    "notification_observer_failed",
                    observer=getattr(observer, "__qualname__", repr(observer)),
                    error=str(e),
                    error_type=type(e).__name__
                )
