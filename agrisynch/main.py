"""FastAPI application entrypoint — lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agrisynch.config import get_settings
from agrisynch.data.reference import validate_reference_data
from agrisynch.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from agrisynch.models.enums import CropType, SoilType
from agrisynch.routes import advisory, reference

logger = structlog.get_logger("agrisynch")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Re-check reference dataset completeness
    """
    configure_structured_logging()
    settings = get_settings()
    try:
        validate_reference_data()
    except Exception as exc:
        logger.exception("startup_failure", error=str(exc))
        raise

    logger.info(
        "agrisynch_starting",
        log_level=settings.log_level,
        crop_types=len(CropType),
        soil_types=len(SoilType),
        high_precip_threshold=settings.high_precip_threshold,
    )

    yield

    logger.info("agrisynch_shutting_down")


app = FastAPI(
    title="AgriSynch Advisory API",
    description=(
        "Offline farmer advisory engine — derives growth stages and prioritized "
        "irrigation, fertilizer, pest and weather insights from registered plots, "
        "soil profiles and a short weather forecast."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "agrisynch",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(advisory.router, prefix="/api/v1")
app.include_router(reference.router, prefix="/api/v1")
