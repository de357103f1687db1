from datetime import date

from pydantic import BaseModel, Field


# ─── Inbound queries ───


class FlightQuery(BaseModel):
    departure_id: str = Field(min_length=1)
    arrival_id: str = Field(min_length=1)
    outbound_date: date
    return_date: date | None = None
    adults: int | None = Field(default=None, ge=1)
    currency: str | None = None
    travel_class: int | None = None
    stops: int | None = None
    sort_by: int | None = None


class HotelQuery(BaseModel):
    q: str | None = None
    check_in_date: date
    check_out_date: date
    adults: int | None = Field(default=None, ge=1)
    currency: str | None = None
    rating: int | None = None
    sort_by: int | None = None


# ─── Canonical output records ───


class FlightRecord(BaseModel):
    airline: str
    from_: str = Field(alias="from")
    to: str
    departure: str
    arrival: str
    duration: str
    price: str
    priceNum: float
    stops: str

    model_config = {"populate_by_name": True}


class HotelRecord(BaseModel):
    name: str
    location: str
    rating: str
    ratingNum: float
    amenities: str
    price: str
    priceNum: float
    image: str


class FlightSearchResponse(BaseModel):
    flights: list[FlightRecord]


class HotelSearchResponse(BaseModel):
    hotels: list[HotelRecord]


# ─── SerpAPI payloads (every field optional, unknown fields ignored) ───


class SerpAirport(BaseModel):
    id: str | None = None
    name: str | None = None
    time: str | None = None


class SerpFlightLeg(BaseModel):
    airline: str | None = None
    departure_airport: SerpAirport | None = None
    arrival_airport: SerpAirport | None = None
    duration: int | None = None


class SerpFlightGroup(BaseModel):
    flights: list[SerpFlightLeg] | None = None
    total_duration: int | None = None
    price: float | None = None


class SerpFlightsResponse(BaseModel):
    best_flights: list[SerpFlightGroup] | None = None
    other_flights: list[SerpFlightGroup] | None = None


class SerpRate(BaseModel):
    extracted_lowest: float | None = None


class SerpImage(BaseModel):
    thumbnail: str | None = None


class SerpHotelProperty(BaseModel):
    name: str | None = None
    neighborhood: str | None = None
    location: str | None = None
    overall_rating: float | None = None
    amenities: list[str] | None = None
    rate_per_night: SerpRate | None = None
    thumbnail: str | None = None
    images: list[SerpImage] | None = None


class SerpHotelsResponse(BaseModel):
    properties: list[SerpHotelProperty] | None = None
