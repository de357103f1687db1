"""Flight and hotel search proxy backed by SerpAPI (Google Flights / Google Hotels).

One upstream call per search, no retry and no fallback. Upstream payloads are
parsed into all-optional models and mapped onto the canonical records with an
explicit default for every missing field.
"""

import logging
from typing import Any

import httpx
import pydantic

from voya.data.currency import format_number, format_price
from voya.errors import UpstreamConfigError, UpstreamRequestError
from voya.schemas.search import (
    FlightQuery,
    FlightRecord,
    HotelQuery,
    HotelRecord,
    SerpFlightGroup,
    SerpFlightsResponse,
    SerpHotelProperty,
    SerpHotelsResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "INR"
DEFAULT_LANGUAGE = "en"
DEFAULT_COUNTRY = "in"

# Google Flights "type": 1 = round trip, 2 = one way
TRIP_ROUND = "1"
TRIP_ONE_WAY = "2"

UNKNOWN_AIRLINE = "Unknown"
NOT_AVAILABLE = "N/A"
DEFAULT_HOTEL_NAME = "Hotel"
DEFAULT_HOTEL_LOCATION = "Unknown"
DEFAULT_HOTEL_RATING = 4.0
DEFAULT_HOTEL_PRICE = 5000.0
DEFAULT_HOTEL_AMENITIES = "WiFi"
DEFAULT_HOTEL_IMAGE = "🏘"
MAX_AMENITIES = 4


# ─── Query-string building ───


def flight_params(query: FlightQuery, api_key: str) -> dict[str, str]:
    params = {
        "engine": "google_flights",
        "departure_id": query.departure_id,
        "arrival_id": query.arrival_id,
        "outbound_date": query.outbound_date.isoformat(),
        "currency": query.currency or DEFAULT_CURRENCY,
        "hl": DEFAULT_LANGUAGE,
        "gl": DEFAULT_COUNTRY,
        "adults": str(query.adults or 1),
        "travel_class": str(query.travel_class or 1),
        "stops": str(query.stops if query.stops is not None else 0),
        "sort_by": str(query.sort_by or 1),
        "api_key": api_key,
    }
    if query.return_date:
        params["return_date"] = query.return_date.isoformat()
        params["type"] = TRIP_ROUND
    else:
        params["type"] = TRIP_ONE_WAY
    return params


def hotel_params(query: HotelQuery, api_key: str) -> dict[str, str]:
    params = {
        "engine": "google_hotels",
        "q": query.q or "hotels",
        "check_in_date": query.check_in_date.isoformat(),
        "check_out_date": query.check_out_date.isoformat(),
        "currency": query.currency or DEFAULT_CURRENCY,
        "hl": DEFAULT_LANGUAGE,
        "gl": DEFAULT_COUNTRY,
        "adults": str(query.adults or 1),
        "api_key": api_key,
    }
    if query.rating:
        params["rating"] = str(query.rating)
    if query.sort_by:
        params["sort_by"] = str(query.sort_by)
    return params


# ─── Record mapping ───


def map_flight_group(group: SerpFlightGroup, query: FlightQuery, currency: str) -> FlightRecord | None:
    """Collapse a multi-leg offer into one record. Offers without legs are dropped."""
    legs = group.flights or []
    if not legs:
        return None

    first, last = legs[0], legs[-1]
    dep = first.departure_airport
    arr = last.arrival_airport
    price = group.price or 0

    return FlightRecord(
        airline=first.airline or UNKNOWN_AIRLINE,
        from_=(dep.id if dep and dep.id else query.departure_id),
        to=(arr.id if arr and arr.id else query.arrival_id),
        departure=(dep.time if dep and dep.time else NOT_AVAILABLE),
        arrival=(arr.time if arr and arr.time else NOT_AVAILABLE),
        duration=f"{group.total_duration // 60}h" if group.total_duration else NOT_AVAILABLE,
        price=format_price(price, currency) if price else NOT_AVAILABLE,
        priceNum=price,
        stops="Non-stop" if len(legs) == 1 else f"{len(legs) - 1} stops",
    )


def map_hotel(hotel: SerpHotelProperty, currency: str) -> HotelRecord:
    price = (hotel.rate_per_night.extracted_lowest if hotel.rate_per_night else None) or DEFAULT_HOTEL_PRICE
    rating = hotel.overall_rating or DEFAULT_HOTEL_RATING
    image = hotel.thumbnail
    if not image and hotel.images:
        image = hotel.images[0].thumbnail

    return HotelRecord(
        name=hotel.name or DEFAULT_HOTEL_NAME,
        location=hotel.neighborhood or hotel.location or DEFAULT_HOTEL_LOCATION,
        rating=f"{format_number(rating)} ★",
        ratingNum=rating,
        amenities=(
            ", ".join(hotel.amenities[:MAX_AMENITIES]) if hotel.amenities is not None else DEFAULT_HOTEL_AMENITIES
        ),
        price=f"{format_price(price, currency)}/night",
        priceNum=price,
        image=image or DEFAULT_HOTEL_IMAGE,
    )


# ─── Proxy ───


class SearchProxy:
    """Adapter for the SerpAPI search endpoint."""

    def __init__(
        self,
        api_key: str,
        http: httpx.AsyncClient,
        base_url: str = "https://serpapi.com",
        timeout: float = 60.0,
    ):
        self._api_key = api_key
        self._http = http
        self._url = base_url.rstrip("/") + "/search.json"
        self._timeout = timeout

    def require_key(self) -> str:
        if not self._api_key:
            raise UpstreamConfigError("SerpAPI key not configured")
        return self._api_key

    async def _fetch(self, params: dict[str, str]) -> dict[str, Any]:
        engine = params.get("engine")
        try:
            resp = await self._http.get(self._url, params=params, timeout=self._timeout)
        except httpx.HTTPError as e:
            raise UpstreamRequestError(f"SerpAPI request failed: {e!r}")

        try:
            data = resp.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("error"):
            raise UpstreamRequestError(f"SerpAPI error: {data['error']}")
        if not resp.is_success:
            raise UpstreamRequestError(f"SerpAPI error: HTTP {resp.status_code} {resp.reason_phrase}")
        if not isinstance(data, dict):
            raise UpstreamRequestError("SerpAPI returned a malformed response")

        logger.debug(f"SerpAPI {engine} search completed")
        return data

    async def search_flights(self, query: FlightQuery) -> list[FlightRecord]:
        api_key = self.require_key()
        currency = query.currency or DEFAULT_CURRENCY
        data = await self._fetch(flight_params(query, api_key))

        try:
            parsed = SerpFlightsResponse.model_validate(data)
        except pydantic.ValidationError as e:
            raise UpstreamRequestError(f"Unexpected SerpAPI flights payload: {e.error_count()} invalid fields")

        flights = []
        for group in (parsed.best_flights or []) + (parsed.other_flights or []):
            record = map_flight_group(group, query, currency)
            if record is not None:
                flights.append(record)

        logger.info(
            f"Flight search {query.departure_id}->{query.arrival_id} on "
            f"{query.outbound_date.isoformat()}: {len(flights)} results"
        )
        return flights

    async def search_hotels(self, query: HotelQuery) -> list[HotelRecord]:
        api_key = self.require_key()
        currency = query.currency or DEFAULT_CURRENCY
        data = await self._fetch(hotel_params(query, api_key))

        try:
            parsed = SerpHotelsResponse.model_validate(data)
        except pydantic.ValidationError as e:
            raise UpstreamRequestError(f"Unexpected SerpAPI hotels payload: {e.error_count()} invalid fields")

        hotels = [map_hotel(h, currency) for h in parsed.properties or []]
        logger.info(f"Hotel search '{query.q or 'hotels'}': {len(hotels)} results")
        return hotels
