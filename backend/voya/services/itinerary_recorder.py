"""Best-effort itinerary persistence. Never raises into the request path."""

import logging
from voya.errors import PersistenceError
from voya.models.itinerary import Itinerary
from voya.schemas.itinerary import ItineraryRequest
from voya.services.itinerary_store import ItineraryStore
from voya.services.llm_client import ItineraryResult

logger = logging.getLogger(__name__)


class ItineraryRecorder:
    """Writes generated itineraries to the store.

    Failures are logged, counted in ``failure_count`` and kept in
    ``last_error``; the HTTP response is never affected.
    """

    def __init__(self, store: ItineraryStore | None):
        self._store = store
        self.failure_count = 0
        self.last_error: PersistenceError | None = None

    @property
    def enabled(self) -> bool:
        return self._store is not None

    async def record(self, request: ItineraryRequest, result: ItineraryResult) -> None:
        if self._store is None:
            logger.debug("No itinerary store configured, skipping persistence")
            return

        record = Itinerary(
            destination=request.destination,
            duration=request.duration,
            preferences=request.preferences,
            itinerary=result.itinerary,
            ai_provider=result.provider,
        )
        try:
            await self._store.insert(record)
        except Exception as e:
            self._report(PersistenceError(f"Failed to save itinerary for {request.destination}: {e}"))
            return

        logger.info(f"Saved itinerary {record.id} ({request.destination}, {request.duration} days)")

    def _report(self, error: PersistenceError) -> None:
        self.failure_count += 1
        self.last_error = error
        logger.error(error.message)
