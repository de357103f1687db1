import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ItineraryRequest(BaseModel):
    destination: str = Field(min_length=1)
    duration: int = Field(gt=0)
    preferences: str | None = None

    @field_validator("destination")
    @classmethod
    def _strip_destination(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("destination must not be blank")
        return v

    @field_validator("preferences", mode="before")
    @classmethod
    def _preferences_as_text(cls, v):
        # Numbers and booleans read as text; other JSON types stay invalid
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("preferences")
    @classmethod
    def _blank_preferences_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class ItineraryResponse(BaseModel):
    success: bool = True
    itinerary: str
    aiProvider: str | None = None


class ItineraryRecordResponse(BaseModel):
    id: uuid.UUID
    destination: str
    duration: int
    preferences: str | None
    itinerary: str
    ai_provider: str | None
    created_at: datetime | None

    model_config = {"from_attributes": True}


class ItineraryListResponse(BaseModel):
    itineraries: list[ItineraryRecordResponse]
