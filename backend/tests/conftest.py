import uuid
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from voya.config import Settings
from voya.context import AppContext
from voya.errors import ProviderCallError
from voya.main import create_app
from voya.models.itinerary import Itinerary
from voya.services.itinerary_recorder import ItineraryRecorder
from voya.services.llm_client import LLMClient
from voya.services.search_proxy import SearchProxy


class FakeProvider:
    """Stands in for an LLM provider and records how often it was called."""

    def __init__(self, provider_id: str, text: str = "", error: Exception | None = None):
        self.id = provider_id
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text

    async def aclose(self) -> None:
        pass


class FakeStore:
    """In-memory itinerary store; set ``fail`` to make every call raise."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.records: list[Itinerary] = []

    async def insert(self, record: Itinerary) -> Itinerary:
        if self.fail:
            raise ConnectionError("database unreachable")
        record.id = record.id or uuid.uuid4()
        record.created_at = datetime.now(timezone.utc)
        self.records.append(record)
        return record

    async def get(self, itinerary_id: uuid.UUID) -> Itinerary | None:
        if self.fail:
            raise ConnectionError("database unreachable")
        return next((r for r in self.records if r.id == itinerary_id), None)

    async def list_recent(self, limit: int = 20) -> list[Itinerary]:
        if self.fail:
            raise ConnectionError("database unreachable")
        return list(reversed(self.records))[:limit]


class RecordingTransport(httpx.MockTransport):
    """httpx transport that answers from a handler and keeps every request."""

    def __init__(self, handler=None):
        self.requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if handler is None:
                raise AssertionError(f"unexpected network call to {request.url}")
            return handler(request)

        super().__init__(_handle)


@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        cors_origin="*",
        database_url="",
        openrouter_api_key="",
        bytez_api_key="",
        openai_api_key="",
        anthropic_api_key="",
        serpapi_key="",
    )


@pytest.fixture
def make_context(test_settings):
    """Factory for an AppContext wired with test doubles."""

    def _make(providers=None, store=None, serpapi_key="", transport=None, settings=None):
        http = httpx.AsyncClient(transport=transport or RecordingTransport())
        return AppContext(
            settings=settings or test_settings,
            llm_client=LLMClient(providers or []),
            recorder=ItineraryRecorder(store),
            search_proxy=SearchProxy(serpapi_key, http),
            store=store,
            http=http,
        )

    return _make


@pytest.fixture
def make_client(make_context):
    """Factory for a TestClient around an app built on a test context."""

    def _make(**kwargs):
        context = make_context(**kwargs)
        return TestClient(create_app(context=context)), context

    return _make


@pytest.fixture
def working_provider():
    return FakeProvider("openrouter", text="Day 1: Louvre\nDay 2: Montmartre\nDay 3: Versailles")


@pytest.fixture
def failing_provider():
    return FakeProvider("openrouter", error=ProviderCallError("openrouter", "HTTP 503 Service Unavailable"))


@pytest.fixture
def sample_flights_payload():
    """Trimmed SerpAPI google_flights response."""
    return {
        "best_flights": [
            {
                "flights": [
                    {
                        "airline": "IndiGo",
                        "departure_airport": {"id": "DEL", "name": "Indira Gandhi", "time": "2025-06-01 06:00"},
                        "arrival_airport": {"id": "BOM", "name": "Chhatrapati Shivaji", "time": "2025-06-01 08:10"},
                        "duration": 130,
                    }
                ],
                "total_duration": 130,
                "price": 5423,
            }
        ],
        "other_flights": [
            {
                "flights": [
                    {
                        "airline": "Air India",
                        "departure_airport": {"id": "DEL", "time": "2025-06-01 09:00"},
                        "arrival_airport": {"id": "AMD", "time": "2025-06-01 10:30"},
                    },
                    {
                        "airline": "Air India",
                        "departure_airport": {"id": "AMD", "time": "2025-06-01 12:00"},
                        "arrival_airport": {"id": "BOM", "time": "2025-06-01 13:15"},
                    },
                ],
                "total_duration": 255,
                "price": 7100,
            },
            {"flights": [], "price": 1},
            {"price": 2},
        ],
    }


@pytest.fixture
def sample_hotels_payload():
    """Trimmed SerpAPI google_hotels response."""
    return {
        "properties": [
            {
                "name": "The Oberoi",
                "neighborhood": "Nariman Point",
                "overall_rating": 4.7,
                "amenities": ["Free Wi-Fi", "Pool", "Spa", "Gym", "Bar"],
                "rate_per_night": {"lowest": "₹21,000", "extracted_lowest": 21000},
                "thumbnail": "https://example.com/oberoi.jpg",
            },
            {},
        ]
    }
