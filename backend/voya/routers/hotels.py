"""Hotels router — proxies Google Hotels search through SerpAPI."""

import logging

from fastapi import APIRouter, Depends, Request

from voya.context import AppContext
from voya.dependencies import get_context
from voya.errors import ValidationError, VoyaError
from voya.schemas.search import HotelQuery, HotelSearchResponse
from voya.services.request_validator import read_json_body, validate_search_query

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search", response_model=HotelSearchResponse)
async def search_hotels(request: Request, ctx: AppContext = Depends(get_context)):
    body = await read_json_body(request)
    ctx.search_proxy.require_key()
    query = validate_search_query(HotelQuery, body)

    if query.check_in_date >= query.check_out_date:
        raise ValidationError("check_in_date must be before check_out_date")

    try:
        hotels = await ctx.search_proxy.search_hotels(query)
    except VoyaError as e:
        logger.error(f"Hotels API error: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Hotels API error: {e}")
        raise VoyaError(str(e))

    return HotelSearchResponse(hotels=hotels)
