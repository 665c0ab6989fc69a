"""
GPX Monster API

FastAPI application for merging and normalizing GPX tracks.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gpx_monster import __version__
from gpx_monster.config import settings
from gpx_monster.api.v1.router import api_router
from gpx_monster.shared.log import setup_logging


# === Logging Setup ===
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting GPX Monster API...")
    yield
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="GPX Monster API",
    description="Merge GPX tracks into one route or normalize them one by one",
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
