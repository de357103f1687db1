"""Flights router — proxies Google Flights search through SerpAPI."""

import logging

from fastapi import APIRouter, Depends, Request

from voya.context import AppContext
from voya.dependencies import get_context
from voya.errors import VoyaError
from voya.schemas.search import FlightQuery, FlightSearchResponse
from voya.services.request_validator import read_json_body, validate_search_query

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search", response_model=FlightSearchResponse)
async def search_flights(request: Request, ctx: AppContext = Depends(get_context)):
    body = await read_json_body(request)
    ctx.search_proxy.require_key()
    query = validate_search_query(FlightQuery, body)

    try:
        flights = await ctx.search_proxy.search_flights(query)
    except VoyaError as e:
        logger.error(f"Flights API error: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Flights API error: {e}")
        raise VoyaError(str(e))

    return FlightSearchResponse(flights=flights)
