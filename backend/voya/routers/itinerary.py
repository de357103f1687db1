"""Itinerary router — generation through the LLM provider chain, plus stored itinerary lookup."""

import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from voya.context import AppContext
from voya.dependencies import get_context, get_store
from voya.errors import AllProvidersFailedError, NotFoundError, VoyaError
from voya.schemas.itinerary import (
    ItineraryListResponse,
    ItineraryRecordResponse,
    ItineraryResponse,
)
from voya.services.itinerary_store import ItineraryStore
from voya.services.request_validator import read_json_body, validate_itinerary_request

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/itinerary/generate", response_model=ItineraryResponse)
async def generate_itinerary(
    request: Request,
    background_tasks: BackgroundTasks,
    ctx: AppContext = Depends(get_context),
):
    """Generate a day-by-day itinerary. Persistence runs after the response is ready."""
    body = await read_json_body(request)
    req = validate_itinerary_request(body)

    try:
        result = await ctx.llm_client.generate(req)
    except AllProvidersFailedError as e:
        logger.error(f"Itinerary generation failed for {req.destination}: {e.message}")
        raise
    except VoyaError:
        raise
    except Exception as e:
        logger.error(f"Error generating itinerary: {e}")
        raise VoyaError(str(e) or "Internal Server Error")

    background_tasks.add_task(ctx.recorder.record, req, result)

    return ItineraryResponse(itinerary=result.itinerary, aiProvider=result.provider)


@router.get("/itineraries", response_model=ItineraryListResponse)
async def list_itineraries(
    limit: int = Query(20, ge=1, le=100),
    store: ItineraryStore = Depends(get_store),
):
    """Most recently generated itineraries, newest first."""
    try:
        records = await store.list_recent(limit)
    except Exception as e:
        logger.error(f"Failed to list itineraries: {e}")
        raise VoyaError(str(e))
    return ItineraryListResponse(
        itineraries=[ItineraryRecordResponse.model_validate(r) for r in records]
    )


@router.get("/itineraries/{itinerary_id}", response_model=ItineraryRecordResponse)
async def get_itinerary(
    itinerary_id: uuid.UUID,
    store: ItineraryStore = Depends(get_store),
):
    try:
        record = await store.get(itinerary_id)
    except Exception as e:
        logger.error(f"Failed to load itinerary {itinerary_id}: {e}")
        raise VoyaError(str(e))
    if record is None:
        raise NotFoundError("Itinerary not found")
    return ItineraryRecordResponse.model_validate(record)
