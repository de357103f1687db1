from fastapi import Request

from voya.context import AppContext
from voya.errors import StoreUnavailableError
from voya.services.itinerary_store import ItineraryStore


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_store(request: Request) -> ItineraryStore:
    store = get_context(request).store
    if store is None:
        raise StoreUnavailableError("Itinerary storage is not configured")
    return store
