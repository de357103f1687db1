import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from voya.config import Settings, settings
from voya.context import AppContext, build_context
from voya.errors import VoyaError

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_LOG_DIR.mkdir(exist_ok=True)

_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "voya.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from voya.routers import flights, hotels, itinerary

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(context: AppContext | None = None, app_settings: Settings | None = None) -> FastAPI:
    """Build the API. A prebuilt context is used as-is and left open on shutdown."""
    app_settings = app_settings or (context.settings if context else settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if getattr(app.state, "context", None) is None:
            owned = await build_context(app_settings)
            app.state.context = owned
        logger.info(f"AI providers: {app.state.context.llm_client.provider_ids or 'none'}")

        yield

        if owned is not None:
            await owned.aclose()
            app.state.context = None
            logger.info("Application context closed")

    app = FastAPI(
        title="VOYA",
        description="Travel itinerary generation and flight/hotel search gateway",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.context = context

    cors_headers = {
        "Access-Control-Allow-Origin": app_settings.cors_origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    }

    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(cors_headers)
        return response

    @app.exception_handler(VoyaError)
    async def voya_error_handler(request: Request, exc: VoyaError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        return _error(400, f"Invalid or missing fields: {', '.join(fields)}")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both answer 404
        if exc.status_code in (404, 405):
            return _error(404, "Not found")
        return _error(exc.status_code, str(exc.detail))

    app.include_router(itinerary.router, prefix="/api", tags=["itinerary"])
    app.include_router(flights.router, prefix="/api/flights", tags=["flights"])
    app.include_router(hotels.router, prefix="/api/hotels", tags=["hotels"])

    @app.get("/api/health")
    async def health_check(request: Request):
        ctx: AppContext | None = request.app.state.context
        return {
            "status": "ok",
            "message": "VOYA API running",
            "aiProviders": ctx.llm_client.provider_ids if ctx else [],
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("voya.main:app", host="0.0.0.0", port=settings.port)
