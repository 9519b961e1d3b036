"""
Shared test fixtures.

Backend fixtures run the services on temporary data files.
Client fixtures provide in-memory fakes for the sync engine's
collaborators.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import asyncio
import json
import pytest
import pytest_asyncio
import httpx
from unittest.mock import patch
from typing import Generator, Optional

from models.place import Place
from models.selection import SelectionCollection
from models.transaction import TransactionError
from integrations.contracts import CatalogSource, RemoteStore, NotificationSurface
from exceptions import FetchError
from tests.factories import PlaceFactory


# ===================
# FAKE COLLABORATORS
# ===================

class FakeRemoteStore(RemoteStore):
    """
    In-memory RemoteStore.

    Usage:
        remote = FakeRemoteStore()
        remote.fail_next(RemoteRejected("Failed to update places."))
        remote.hold()          # next writes wait until release()
    """

    def __init__(self, stored: Optional[SelectionCollection] = None):
        self.stored = stored if stored is not None else SelectionCollection()
        self.writes: list[SelectionCollection] = []
        self.read_error: Optional[Exception] = None
        self._failures: list[Exception] = []
        self._gate: Optional[asyncio.Event] = None

    def fail_next(self, error: Exception) -> None:
        self._failures.append(error)

    def hold(self) -> None:
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def read_selection(self) -> SelectionCollection:
        if self.read_error is not None:
            raise self.read_error
        return self.stored

    async def replace_selection(self, next_collection: SelectionCollection) -> str:
        self.writes.append(next_collection)
        failure = self._failures.pop(0) if self._failures else None
        if self._gate is not None:
            await self._gate.wait()
        if failure is not None:
            raise failure
        self.stored = next_collection
        return "User places updated."


class FakeCatalog(CatalogSource):
    """In-memory CatalogSource."""

    def __init__(self, places: list[Place], error: Optional[FetchError] = None):
        self.places = places
        self.error = error
        self.calls = 0

    async def list_items(self) -> list[Place]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.places)


class RecordingNotifications(NotificationSurface):
    """NotificationSurface that records every call."""

    def __init__(self):
        self.shown: list[TransactionError] = []
        self.dismissed = 0

    def show(self, error: TransactionError) -> None:
        self.shown.append(error)

    def dismiss(self) -> None:
        self.dismissed += 1


# ===================
# FIXTURES
# ===================

@pytest.fixture(autouse=True)
def reset_factories():
    """Restart factory counters so generated ids are stable per test."""
    PlaceFactory.reset()
    yield


@pytest.fixture
def sample_places() -> list[Place]:
    """Three catalog places: p1, p2, p3."""
    return [
        PlaceFactory.build(id="p1", name="Forest Waterfall", latitude=44.5588, longitude=-80.344),
        PlaceFactory.build(id="p2", name="Sahara Desert Dunes", latitude=25.0, longitude=0.0),
        PlaceFactory.build(id="p3", name="Himalayan Peaks", latitude=27.9881, longitude=86.925),
    ]


@pytest.fixture
def remote() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def notifications() -> RecordingNotifications:
    return RecordingNotifications()


@pytest.fixture
def data_dir(tmp_path, sample_places) -> Path:
    """
    Temporary data directory with a catalog of sample_places and
    an empty selection.
    """
    (tmp_path / "places.json").write_text(
        json.dumps({"places": [place.model_dump() for place in sample_places]}),
        encoding="utf-8"
    )
    (tmp_path / "user-places.json").write_text(
        json.dumps({"places": []}),
        encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def place_service(data_dir):
    from services.place_service import PlaceService
    return PlaceService(path=data_dir / "places.json")


@pytest.fixture
def user_place_service(data_dir, place_service):
    from services.user_place_service import UserPlaceService
    return UserPlaceService(path=data_dir / "user-places.json", place_service=place_service)


@pytest.fixture
def mock_services(place_service, user_place_service) -> Generator:
    """
    Point the routes at the temporary-file services.

    Usage:
        def test_something(mock_services, test_client):
            response = test_client.get("/places")
    """
    with patch("main.get_place_service", return_value=place_service):
        with patch("routes.places.get_place_service", return_value=place_service):
            with patch("routes.user_places.get_user_place_service", return_value=user_place_service):
                yield place_service, user_place_service


# ===================
# API TEST CLIENTS
# ===================

@pytest.fixture
def test_client(mock_services):
    """
    Create FastAPI test client backed by temporary data files.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/places")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest_asyncio.fixture
async def api_client(mock_services):
    """
    PlacesApiClient talking to the real app in-process.

    Usage:
        async def test_something(api_client):
            places = await api_client.list_items()
    """
    from main import app
    from integrations.places_api import PlacesApiClient

    http = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver"
    )
    client = PlacesApiClient(base_url="http://testserver", client=http)
    yield client
    await client.aclose()
