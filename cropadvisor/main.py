"""FastAPI application entrypoint — lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.asyncio import Redis

from cropadvisor import __version__
from cropadvisor.config import get_settings
from cropadvisor.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from cropadvisor.models.crops import CROP_PROFILES
from cropadvisor.routes import alerts, analytics, ask, insights, weather

logger = logging.getLogger("cropadvisor")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Connect to Redis (weather cache, alert dismissals, analytics history)

    Shutdown:
      1. Close Redis connection pool

    An unreachable Redis is logged and the app keeps serving without caching.
    """
    settings = get_settings()
    configure_structured_logging(settings)
    logger.info(
        "CropAdvisor starting",
        extra={
            "log_level": settings.log_level,
            "default_crop_type": settings.default_crop_type.value,
            "cache_enabled": settings.cache_enabled,
        },
    )

    redis: Redis | None = None
    app.state.redis = None
    if settings.cache_enabled:
        try:
            redis = Redis.from_url(settings.redis_url, decode_responses=True)
            await redis.ping()
            app.state.redis = redis
        except Exception as exc:
            logger.warning("redis unavailable, caching disabled", extra={"error": str(exc)})
            if redis is not None:
                await redis.aclose()
            redis = None

    yield

    logger.info("CropAdvisor shutting down")
    if redis is not None:
        await redis.aclose()


async def _run_readiness_checks(app: FastAPI) -> dict[str, dict[str, Any]]:
    checks: dict[str, dict[str, Any]] = {}

    redis: Redis | None = getattr(app.state, "redis", None)
    if redis is None:
        checks["redis"] = {"ok": False, "message": "not connected"}
    else:
        try:
            await redis.ping()
            checks["redis"] = {"ok": True, "message": "ok"}
        except Exception as exc:
            checks["redis"] = {"ok": False, "message": str(exc)}

    inconsistent = sorted(str(crop) for crop, profile in CROP_PROFILES.items() if not profile.is_consistent())
    checks["crop_profiles"] = {
        "ok": not inconsistent,
        "message": "ok" if not inconsistent else f"inconsistent: {', '.join(inconsistent)}",
    }
    return checks


app = FastAPI(
    title="CropAdvisor API",
    description=(
        "Crop advisory API — turns current weather and a short forecast into "
        "per-crop condition ratings, irrigation plans, pest/disease risk, "
        "activity windows, crop-loss risk and farming recommendations."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
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
        "service": "cropadvisor",
        "version": __version__,
    }


@app.get("/health/ready", tags=["system"])
async def readiness_check() -> JSONResponse:
    checks = await _run_readiness_checks(app)
    ready = all(item["ok"] for item in checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ok" if ready else "degraded", "checks": checks},
    )


# ── Router registration ────────────────────────────────────────────────────
app.include_router(insights.router, prefix="/api/v1")
app.include_router(weather.router, prefix="/api/v1")
app.include_router(alerts.router, prefix="/api/v1")
app.include_router(analytics.router, prefix="/api/v1")
app.include_router(ask.router, prefix="/api/v1")
