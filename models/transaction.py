"""
Transaction schemas for the sync engine.

One transaction is one add-or-remove user action:
IDLE -> OPTIMISTIC_APPLIED -> CONFIRMED | ROLLED_BACK
"""

from enum import Enum
from pydantic import Field

from models.base import FrozenSchema


class TransactionState(str, Enum):
    """Transaction lifecycle states."""
    IDLE = "IDLE"
    OPTIMISTIC_APPLIED = "OPTIMISTIC_APPLIED"
    CONFIRMED = "CONFIRMED"
    ROLLED_BACK = "ROLLED_BACK"


class MutationKind(str, Enum):
    """User actions the engine can run."""
    ADD = "ADD"
    REMOVE = "REMOVE"


ALLOWED_TRANSITIONS = {
    TransactionState.IDLE: {TransactionState.OPTIMISTIC_APPLIED},
    TransactionState.OPTIMISTIC_APPLIED: {
        TransactionState.CONFIRMED,
        TransactionState.ROLLED_BACK,
    },
    TransactionState.CONFIRMED: set(),
    TransactionState.ROLLED_BACK: set(),
}


def is_valid_state_transition(current: TransactionState, new: TransactionState) -> bool:
    """
    Check if a transaction may move from current to new.

    Rules:
    - Only forward along the lifecycle, one step at a time
    - CONFIRMED and ROLLED_BACK are terminal
    """
    return new in ALLOWED_TRANSITIONS[current]


class TransactionError(FrozenSchema):
    """User-facing failure message for a rolled back transaction."""

    message: str = Field(..., min_length=1)
