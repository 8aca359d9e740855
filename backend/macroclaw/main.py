"""
MacroClaw API

FastAPI application for Strava connection and activity sync.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from macroclaw import __version__
from macroclaw.config import settings
from macroclaw.db.session import init_db
from macroclaw.api.v1.router import api_router


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting MacroClaw API...")
    await init_db()
    logger.info("Database initialized")

    if not (settings.strava_client_id and settings.strava_client_secret):
        logger.warning("Strava integration not configured (STRAVA_CLIENT_ID / STRAVA_CLIENT_SECRET)")

    yield

    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="MacroClaw API",
    description="Strava activity sync for athlete nutrition tracking",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
