"""
Custom exception classes for the application.

API errors carry an HTTP status and serialize with to_dict().
Sync errors (RemoteStoreError subclasses) are raised by the
picker client when talking to the places API.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PLACE_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class StorageError(AppError):
    """Reading or writing a data file failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="STORAGE_ERROR",
            message=f"Storage {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# PLACE ERRORS
# ===================

class PlaceNotFoundError(NotFoundError):
    """Place not found in the catalog."""

    def __init__(self, place_id: str):
        super().__init__(
            resource="Place",
            identifier=place_id,
            code="PLACE_NOT_FOUND"
        )


class UnknownPlaceError(ValidationError):
    """Selection references ids missing from the catalog."""

    def __init__(self, place_ids: list[str]):
        super().__init__(
            code="UNKNOWN_PLACE",
            message="Selection contains places that are not in the catalog",
            details={"unknown_ids": place_ids}
        )


class DuplicatePlaceIdError(ConflictError):
    """Selection contains the same place id more than once."""

    def __init__(self, place_ids: list[str]):
        super().__init__(
            code="DUPLICATE_PLACE_ID",
            message="Selection contains duplicate place ids",
            details={"duplicate_ids": place_ids}
        )


# ===================
# SYNC ENGINE ERRORS
# ===================

class InvalidStateTransitionError(ValidationError):
    """Transaction state machine moved along an edge it does not have."""

    def __init__(self, current_state: str, new_state: str):
        super().__init__(
            code="INVALID_STATE_TRANSITION",
            message=f"Cannot transition from {current_state} to {new_state}",
            details={
                "current_state": current_state,
                "new_state": new_state,
                "reason": "CONFIRMED and ROLLED_BACK are terminal"
            }
        )


class SessionNotReadyError(AppError):
    """Picker session used before a successful load."""

    def __init__(self, status: str):
        super().__init__(
            code="SESSION_NOT_READY",
            message="Places are not loaded yet",
            status_code=409,
            details={"status": status}
        )


class RemoteStoreError(AppError):
    """
    Base for failures talking to the places API.

    status_code is the HTTP status returned by the API when there
    was one, 503 otherwise.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 503,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=status_code,
            details=details
        )


class FetchError(RemoteStoreError):
    """Initial load (catalog or selection) failed."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="FETCH_FAILED",
            message=message,
            details=details
        )


class NetworkFailure(RemoteStoreError):
    """Request could not be sent or response could not be parsed."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="NETWORK_FAILURE",
            message=message,
            details=details
        )


class RemoteRejected(RemoteStoreError):
    """Response received with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="REMOTE_REJECTED",
            message=message,
            status_code=status_code,
            details=details
        )
