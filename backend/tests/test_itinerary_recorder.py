import logging
import pytest

from conftest import FakeStore
from voya.errors import PersistenceError
from voya.schemas.itinerary import ItineraryRequest
from voya.services.itinerary_recorder import ItineraryRecorder
from voya.services.llm_client import ItineraryResult


@pytest.fixture
def request_and_result():
    return (
        ItineraryRequest(destination="Paris", duration=3, preferences="museums"),
        ItineraryResult(itinerary="Day 1: Louvre", provider="openrouter"),
    )


class TestItineraryRecorder:
    @pytest.mark.asyncio
    async def test_saves_record(self, request_and_result):
        store = FakeStore()
        recorder = ItineraryRecorder(store)

        await recorder.record(*request_and_result)

        assert len(store.records) == 1
        saved = store.records[0]
        assert saved.destination == "Paris"
        assert saved.duration == 3
        assert saved.preferences == "museums"
        assert saved.itinerary == "Day 1: Louvre"
        assert saved.ai_provider == "openrouter"
        assert recorder.failure_count == 0
        assert recorder.last_error is None

    @pytest.mark.asyncio
    async def test_store_failure_is_reported_not_raised(self, request_and_result, caplog):
        recorder = ItineraryRecorder(FakeStore(fail=True))

        with caplog.at_level(logging.ERROR, logger="voya.services.itinerary_recorder"):
            await recorder.record(*request_and_result)

        assert recorder.failure_count == 1
        assert isinstance(recorder.last_error, PersistenceError)
        assert "database unreachable" in recorder.last_error.message
        assert "Failed to save itinerary for Paris" in caplog.text

    @pytest.mark.asyncio
    async def test_repeated_failures_keep_latest_error(self, request_and_result):
        recorder = ItineraryRecorder(FakeStore(fail=True))
        request, result = request_and_result

        await recorder.record(request, result)
        await recorder.record(request.model_copy(update={"destination": "Rome"}), result)

        assert recorder.failure_count == 2
        assert "Rome" in recorder.last_error.message

    @pytest.mark.asyncio
    async def test_without_store_is_a_noop(self, request_and_result):
        recorder = ItineraryRecorder(None)
        assert recorder.enabled is False
        await recorder.record(*request_and_result)
        assert recorder.failure_count == 0
