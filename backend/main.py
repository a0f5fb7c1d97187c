"""FastAPI application entry point.

Startup sequence: settings -> HTTP client -> NASA client + Gemini adapter
-> proxy handlers + assistant router.
"""

from contextlib import asynccontextmanager

import httpx
import structlog
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from backend.agent.router import AssistantRouter
from backend.api.routes import render_proxy_error, router
from backend.core.config import Settings
from backend.core.errors import ProxyError
from backend.core.genai_adapter import GenAIAdapter
from backend.core.nasa_client import NasaClient
from backend.core.proxies import ApodProxy, MarsRoverProxy, NeoTrackerProxy

load_dotenv()

logger = structlog.get_logger(__name__)

settings = Settings.from_env()


def init_services(
    app: FastAPI,
    settings: Settings,
    nasa: NasaClient | None = None,
    genai: GenAIAdapter | None = None,
) -> None:
    """Attach clients, proxies and the assistant router to ``app.state``."""
    nasa = nasa or NasaClient(settings, httpx.Client(timeout=settings.nasa_timeout))
    genai = genai or GenAIAdapter(settings)

    app.state.settings = settings
    app.state.nasa = nasa
    app.state.genai = genai
    app.state.apod_proxy = ApodProxy(nasa)
    app.state.mars_rover_proxy = MarsRoverProxy(nasa)
    app.state.neo_tracker_proxy = NeoTrackerProxy(nasa)
    app.state.assistant = AssistantRouter(nasa, genai, nasa_timeout=settings.assistant_nasa_timeout)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("startup.begin")

    init_services(app, settings)
    logger.info(
        "startup.providers",
        nasa=app.state.nasa.is_configured(),
        gemini=app.state.genai.is_configured(),
    )
    if not app.state.nasa.is_configured():
        logger.warning("startup.nasa_missing", hint="Set NASA_API_KEY in .env")
    if not app.state.genai.is_configured():
        logger.warning("startup.gemini_missing", hint="Set GEMINI_API_KEY in .env")

    logger.info("startup.complete")
    yield

    app.state.nasa.close()
    logger.info("shutdown.complete")


app = FastAPI(
    title="Cosmos Explorer API",
    description="NASA open data (APOD, Mars rovers, near-Earth objects) with the AstroBot assistant",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for the Streamlit frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ProxyError)
async def proxy_error_handler(request: Request, exc: ProxyError):
    logger.warning("request.provider_error", path=request.url.path,
                   error_type=type(exc).__name__, status=exc.status_code)
    return render_proxy_error(exc)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("request.unhandled", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Failed to process your request"})


app.include_router(router)
