"""
Custom exceptions module.

API errors map to HTTP responses via AppError.to_dict().
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    StorageError,

    # Places
    PlaceNotFoundError,
    UnknownPlaceError,
    DuplicatePlaceIdError,

    # Sync engine
    InvalidStateTransitionError,
    SessionNotReadyError,
    RemoteStoreError,
    FetchError,
    NetworkFailure,
    RemoteRejected,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "StorageError",

    # Places
    "PlaceNotFoundError",
    "UnknownPlaceError",
    "DuplicatePlaceIdError",

    # Sync engine
    "InvalidStateTransitionError",
    "SessionNotReadyError",
    "RemoteStoreError",
    "FetchError",
    "NetworkFailure",
    "RemoteRejected",
]
