"""
Optimistic sync engine.

Runs each add/remove as a transaction against the remote store:

    IDLE -> OPTIMISTIC_APPLIED -> CONFIRMED | ROLLED_BACK

The selection store is updated before the remote write starts. If the
write fails, the store is put back to the snapshot taken at the start
of the transaction and the failure is shown on the notification
surface.

Known limitation: transactions are not isolated. A second mutation
issued while the first is in flight snapshots the first one's
optimistic state, and a rollback of either can discard the other's
effect.
"""

from itertools import count
from typing import Optional
import structlog

from models.place import Place
from models.selection import SelectionCollection
from models.transaction import (
    MutationKind,
    TransactionError,
    TransactionState,
    is_valid_state_transition,
)
from integrations.contracts import NotificationSurface, RemoteStore
from services.selection_store import SelectionStore
from exceptions import InvalidStateTransitionError, RemoteStoreError

logger = structlog.get_logger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to update places."

_transaction_ids = count(1)


class Transaction:
    """
    One add-or-remove action and its lifecycle.

    snapshot is only held while the transaction is in flight.
    """

    def __init__(self, kind: MutationKind, place_id: str):
        self.id = next(_transaction_ids)
        self.kind = kind
        self.place_id = place_id
        self.state = TransactionState.IDLE
        self.snapshot: Optional[SelectionCollection] = None
        self.next: Optional[SelectionCollection] = None
        self.confirmation: Optional[str] = None
        self.error: Optional[TransactionError] = None

    @property
    def settled(self) -> bool:
        return self.state in (TransactionState.CONFIRMED, TransactionState.ROLLED_BACK)

    def transition(self, new_state: TransactionState) -> None:
        if not is_valid_state_transition(self.state, new_state):
            raise InvalidStateTransitionError(self.state.value, new_state.value)

        logger.debug(
            "transaction_state_changed",
            transaction_id=self.id,
            from_state=self.state.value,
            to_state=new_state.value
        )
        self.state = new_state

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id}, kind={self.kind.value}, "
            f"place_id={self.place_id!r}, state={self.state.value})"
        )


class SyncEngine:
    """
    Optimistic add/remove against a RemoteStore.

    The engine never mutates the collection itself. It computes the
    next collection and asks the store to replace.
    """

    def __init__(
        self,
        store: SelectionStore,
        remote: RemoteStore,
        notifications: NotificationSurface
    ):
        self.store = store
        self.remote = remote
        self.notifications = notifications

    async def add(self, place: Place) -> Transaction:
        """
        Add place to the front of the selection.

        Adding a place that is already selected leaves the collection
        unchanged but still writes it to the remote store.
        """
        transaction = Transaction(MutationKind.ADD, place.id)
        self._apply(transaction, lambda current: current.with_added(place))
        await self._confirm(transaction)
        return transaction

    async def remove(self, place_id: str) -> Transaction:
        """
        Remove place_id from the selection.

        Removing an id that is not selected is a no-op that still
        writes the collection to the remote store.
        """
        transaction = Transaction(MutationKind.REMOVE, place_id)
        self._apply(transaction, lambda current: current.without(place_id))
        await self._confirm(transaction)
        return transaction

    def _apply(self, transaction: Transaction, mutate) -> None:
        # Runs without suspending: snapshot, compute, replace.
        snapshot = self.store.current()
        next_collection = mutate(snapshot)

        transaction.snapshot = snapshot
        transaction.next = next_collection
        transaction.transition(TransactionState.OPTIMISTIC_APPLIED)
        self.store.replace(next_collection)

        logger.info(
            "transaction_applied",
            transaction_id=transaction.id,
            kind=transaction.kind.value,
            place_id=transaction.place_id,
            changed=next_collection is not snapshot,
            count=len(next_collection)
        )

    async def _confirm(self, transaction: Transaction) -> None:
        try:
            confirmation = await self.remote.replace_selection(transaction.next)
        except RemoteStoreError as e:
            self._rollback(transaction, e)
            return
        except Exception as e:
            # Not a remote failure; restore the snapshot, then let it surface.
            self._rollback(transaction, e, notify=False)
            raise

        transaction.confirmation = confirmation
        transaction.snapshot = None
        transaction.transition(TransactionState.CONFIRMED)

        logger.info(
            "transaction_confirmed",
            transaction_id=transaction.id,
            kind=transaction.kind.value,
            place_id=transaction.place_id,
            confirmation=confirmation
        )

    def _rollback(self, transaction: Transaction, exc: Exception, notify: bool = True) -> None:
        self.store.replace(transaction.snapshot)
        transaction.snapshot = None
        transaction.transition(TransactionState.ROLLED_BACK)

        logger.warning(
            "transaction_rolled_back",
            transaction_id=transaction.id,
            kind=transaction.kind.value,
            place_id=transaction.place_id,
            error=str(exc),
            error_type=type(exc).__name__
        )

        if not notify:
            return

        message = (getattr(exc, "message", None) or str(exc)).strip()
        transaction.error = TransactionError(message=message or DEFAULT_FAILURE_MESSAGE)
        self.notifications.show(transaction.error)
