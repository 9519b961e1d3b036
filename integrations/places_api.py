"""
Places API HTTP client.

Implements CatalogSource and RemoteStore against the backend in
main.py:

    GET /places       -> {"places": [Place, ...]}
    GET /user-places  -> {"places": ["id", ...]}
    PUT /user-places  <- {"places": ["id", ...]}  -> {"message": "..."}

Error mapping:
- Any failure on the two GETs is FetchError
- PUT with a non-2xx status is RemoteRejected, whatever the body says
- PUT that cannot be sent, or whose body cannot be parsed, is NetworkFailure
"""

from typing import Optional
import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from config import settings
from models.place import Place, PlaceListResponse
from models.selection import SelectionCollection, UserPlacesResponse, UpdateConfirmation
from integrations.contracts import CatalogSource, RemoteStore
from exceptions import FetchError, NetworkFailure, RemoteRejected

logger = structlog.get_logger(__name__)

FETCH_PLACES_FAILED = "Could not fetch places, please try again later."
FETCH_USER_PLACES_FAILED = "Failed to fetch user places."
UPDATE_FAILED = "Failed to update places."


class PlacesApiClient(CatalogSource, RemoteStore):
    """
    Async client for the places API.

    Selections travel as id lists, so ids read back from the API are
    resolved against the catalog (fetched on demand and cached).

    Usage:
        async with PlacesApiClient() as api:
            places = await api.list_items()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        if client is None:
            client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=timeout if timeout is not None else settings.remote_timeout_seconds
            )
        self.client = client
        self._catalog: dict[str, Place] = {}

    async def __aenter__(self) -> "PlacesApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # ===================
    # CATALOG SOURCE
    # ===================

    async def list_items(self) -> list[Place]:
        """
        Fetch the catalog.

        Raises:
            FetchError: On transport failure, non-2xx status or bad body
        """
        payload = await self._get_json("/places", FETCH_PLACES_FAILED)

        try:
            places = PlaceListResponse.model_validate(payload).places
        except PydanticValidationError as e:
            logger.error("invalid_places_response", error=str(e))
            raise FetchError(FETCH_PLACES_FAILED, details={"reason": "malformed response"}) from e

        self._catalog = {place.id: place for place in places}
        logger.info("places_fetched", count=len(places))
        return places

    # ===================
    # REMOTE STORE
    # ===================

    async def read_selection(self) -> SelectionCollection:
        """
        Fetch the stored selection.

        Ids missing from the catalog are dropped with a warning. The
        returned selection then differs from what the service stores
        until the next successful replace_selection() writes it back.

        Raises:
            FetchError: On any failure, including a duplicate id in the response
        """
        payload = await self._get_json("/user-places", FETCH_USER_PLACES_FAILED)

        try:
            ids = UserPlacesResponse.model_validate(payload).places
        except PydanticValidationError as e:
            logger.error("invalid_user_places_response", error=str(e))
            raise FetchError(FETCH_USER_PLACES_FAILED, details={"reason": "malformed response"}) from e

        if not self._catalog or any(place_id not in self._catalog for place_id in ids):
            await self.list_items()

        unknown = [place_id for place_id in ids if place_id not in self._catalog]
        if unknown:
            logger.warning("user_places_unknown_ids_dropped", ids=unknown)

        try:
            selection = SelectionCollection.of(
                self._catalog[place_id] for place_id in ids if place_id in self._catalog
            )
        except PydanticValidationError as e:
            logger.error("user_places_duplicate_ids", ids=ids)
            raise FetchError(FETCH_USER_PLACES_FAILED, details={"reason": "duplicate ids"}) from e

        logger.info("user_places_fetched", count=len(selection))
        return selection

    async def replace_selection(self, next_collection: SelectionCollection) -> str:
        """
        Replace the stored selection with next_collection.

        Returns:
            Confirmation message from the API

        Raises:
            NetworkFailure: Request not sent or response unparseable
            RemoteRejected: Non-2xx status
        """
        ids = next_collection.ids
        logger.info("replacing_remote_selection", count=len(ids))

        try:
            response = await self.client.put("/user-places", json={"places": ids})
        except httpx.RequestError as e:
            logger.error("replace_selection_request_failed", error=str(e), error_type=type(e).__name__)
            raise NetworkFailure(
                f"{UPDATE_FAILED} Could not reach the places service.",
                details={"error": str(e)}
            ) from e

        if not response.is_success:
            message = self._error_message(response) or UPDATE_FAILED
            logger.warning(
                "replace_selection_rejected",
                status_code=response.status_code,
                message=message
            )
            raise RemoteRejected(message, status_code=response.status_code)

        try:
            confirmation = UpdateConfirmation.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error("replace_selection_malformed_response", error=str(e))
            raise NetworkFailure(
                f"{UPDATE_FAILED} The places service sent an unreadable response.",
                details={"status_code": response.status_code}
            ) from e

        logger.info("remote_selection_replaced", message=confirmation.message)
        return confirmation.message

    # ===================
    # HELPERS
    # ===================

    async def _get_json(self, path: str, failure_message: str):
        try:
            response = await self.client.get(path)
        except httpx.RequestError as e:
            logger.error("fetch_failed", path=path, error=str(e), error_type=type(e).__name__)
            raise FetchError(failure_message, details={"path": path, "error": str(e)}) from e

        if not response.is_success:
            logger.error("fetch_rejected", path=path, status_code=response.status_code)
            raise FetchError(
                failure_message,
                details={"path": path, "status_code": response.status_code}
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("fetch_malformed_response", path=path, error=str(e))
            raise FetchError(failure_message, details={"path": path, "reason": "invalid json"}) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        """Pull error.message (AppError envelope) or detail out of an error body."""
        try:
            body = response.json()
        except ValueError:
            return None

        if not isinstance(body, dict):
            return None

        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]

        detail = body.get("detail")
        if isinstance(detail, str):
            return detail

        message = body.get("message")
        return message if isinstance(message, str) else None
