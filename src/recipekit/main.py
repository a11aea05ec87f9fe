"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipekit.config import settings
from recipekit.logging_config import configure_logging, get_logger
from recipekit.routers import ingredients_router

# Configure logging on module load
configure_logging(log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting Recipekit API ({settings.environment})")
    yield
    logger.info("Shutting down Recipekit API")


app = FastAPI(
    title="Recipekit API",
    description="Scale recipe ingredients and convert between imperial and metric units",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ingredients_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "recipekit-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Recipekit API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
