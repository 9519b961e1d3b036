"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
)
from models.place import (
    PlaceImage,
    Place,
    PlaceListResponse,
)
from models.selection import (
    SelectionCollection,
    UserPlacesUpdate,
    UserPlacesResponse,
    UpdateConfirmation,
    find_duplicates,
)
from models.transaction import (
    TransactionState,
    MutationKind,
    TransactionError,
    is_valid_state_transition,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Places
    "PlaceImage",
    "Place",
    "PlaceListResponse",

    # Selection
    "SelectionCollection",
    "UserPlacesUpdate",
    "UserPlacesResponse",
    "UpdateConfirmation",
    "find_duplicates",

    # Transactions
    "TransactionState",
    "MutationKind",
    "TransactionError",
    "is_valid_state_transition",
]
