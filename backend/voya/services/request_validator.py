"""Turn raw JSON bodies into typed request records."""

import json
import logging
from typing import Any, TypeVar

import pydantic
from fastapi import Request

from voya.errors import MalformedRequestError, ValidationError
from voya.schemas.itinerary import ItineraryRequest

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=pydantic.BaseModel)


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON. An empty body reads as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise MalformedRequestError("Invalid JSON body")


def validate_itinerary_request(body: Any) -> ItineraryRequest:
    """Require a non-empty destination and a positive duration."""
    if not isinstance(body, dict):
        raise ValidationError("destination and duration are required")
    try:
        return ItineraryRequest.model_validate(body)
    except pydantic.ValidationError as e:
        logger.debug(f"Rejected itinerary request: {e}")
        fields = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        if fields & {"destination", "duration"}:
            raise ValidationError("destination and duration are required")
        raise ValidationError(f"Invalid or missing fields: {', '.join(sorted(fields))}")


def validate_search_query(model: type[M], body: Any) -> M:
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(body)
    except pydantic.ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ValidationError(f"Invalid or missing fields: {', '.join(fields)}")
