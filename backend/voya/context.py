"""Long-lived collaborators, built once at startup and shared by every request."""

import logging
from dataclasses import dataclass, field

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from voya.config import Settings
from voya.database import create_engine, create_session_factory, create_tables
from voya.services.itinerary_recorder import ItineraryRecorder
from voya.services.itinerary_store import ItineraryStore
from voya.services.llm_client import LLMClient
from voya.services.llm_providers import build_providers
from voya.services.search_proxy import SearchProxy

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    llm_client: LLMClient
    recorder: ItineraryRecorder
    search_proxy: SearchProxy
    store: ItineraryStore | None = None
    http: httpx.AsyncClient | None = None
    engine: AsyncEngine | None = field(default=None, repr=False)

    async def aclose(self) -> None:
        await self.llm_client.aclose()
        if self.http is not None:
            await self.http.aclose()
        if self.engine is not None:
            await self.engine.dispose()


async def build_context(settings: Settings) -> AppContext:
    http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)

    providers = build_providers(settings, http)
    if providers:
        logger.info(f"LLM provider chain: {' -> '.join(p.id for p in providers)}")
    else:
        logger.warning("No LLM provider credentials configured, itinerary generation will fail")

    engine = None
    store = None
    if settings.database_url:
        engine = create_engine(settings.database_url)
        if settings.db_auto_create:
            try:
                await create_tables(engine)
            except Exception as e:
                logger.warning(f"Could not create tables (continuing): {e}")
        store = ItineraryStore(create_session_factory(engine))
    else:
        logger.warning("DATABASE_URL not set, generated itineraries will not be saved")

    if not settings.serpapi_key:
        logger.warning("SERPAPI_KEY not set, flight and hotel search will return errors")

    return AppContext(
        settings=settings,
        llm_client=LLMClient(providers),
        recorder=ItineraryRecorder(store),
        search_proxy=SearchProxy(
            settings.serpapi_key,
            http,
            base_url=settings.serpapi_base_url,
            timeout=settings.http_timeout_seconds,
        ),
        store=store,
        http=http,
        engine=engine,
    )
