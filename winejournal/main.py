"""FastAPI application entry point for Wine Journal."""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from winejournal import __version__
from winejournal.config import settings
from winejournal.database import close_db, init_db, ping_db
from winejournal.services.drink_window import check_expiring_wines
from winejournal.services.telemetry import posthog_service

logger = logging.getLogger(__name__)

TOKEN_CLEANUP_INTERVAL_SECONDS = 3600

_background_tasks: list[asyncio.Task] = []


limiter = Limiter(key_func=get_remote_address)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["X-Permitted-Cross-Domain-Policies"] = "none"
        response.headers["Permissions-Policy"] = (
            "accelerometer=(), camera=(), geolocation=(), gyroscope=(), "
            "magnetometer=(), payment=(), usb=()"
        )

        # JSON API only; the interactive docs load their assets from jsDelivr
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' https://cdn.jsdelivr.net; "
            "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
            "img-src 'self' data: blob: https://fastapi.tiangolo.com; "
            "frame-ancestors 'none'; "
            "form-action 'self'; "
            "base-uri 'self'; "
            "object-src 'none';"
        )

        if settings.enforce_https:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains; preload"
            )

        return response


def _is_production() -> bool:
    """True when not in debug mode and not running under pytest."""
    return not settings.debug and not os.getenv("PYTEST_CURRENT_TEST")


async def _run_token_cleanup() -> None:
    """Hourly removal of expired tokens from the revocation list."""
    from winejournal.models.token_blacklist import RevokedToken

    while True:
        try:
            await asyncio.sleep(TOKEN_CLEANUP_INTERVAL_SECONDS)
            removed = await RevokedToken.cleanup_expired()
            if removed > 0:
                logger.info("Token blacklist cleanup: removed %d expired tokens", removed)
        except asyncio.CancelledError:
            logger.debug("Token cleanup task cancelled")
            break
        except Exception as e:
            logger.error("Token cleanup task error: %s", str(e))
            # Continue running despite errors


async def _run_drink_window_checks() -> None:
    """Periodically log users with cellar wines about to pass their drink-by date."""
    interval = settings.notifications.check_interval_seconds
    while True:
        try:
            await asyncio.sleep(interval)
            counts = await check_expiring_wines()
            if counts:
                logger.info("Drink-window check: %d user(s) with urgent wines", len(counts))
        except asyncio.CancelledError:
            logger.debug("Drink-window task cancelled")
            break
        except Exception as e:
            logger.error("Drink-window task error: %s", str(e))


def _validate_security_configuration() -> None:
    """Validate security configuration at startup.

    Raises:
        RuntimeError: If critical security issues are detected in production.
    """
    issues = []
    warnings = []

    secret_key = settings.secret_key
    if settings.secret_key_generated:
        issues.append(
            "No secret key configured; tokens will not survive a restart. "
            "Set WINEJOURNAL_SECRET_KEY environment variable."
        )
    elif len(secret_key) < 32:
        issues.append(
            "SECRET_KEY is too short (minimum 32 characters). "
            "Set WINEJOURNAL_SECRET_KEY environment variable."
        )

    if _is_production():
        mongodb_url = settings.mongodb_url
        if "localhost" in mongodb_url or "127.0.0.1" in mongodb_url:
            warnings.append(
                "MongoDB URL points to localhost in production. "
                "This may indicate an insecure configuration."
            )

        if not settings.enforce_https:
            warnings.append(
                "HTTPS enforcement is disabled. "
                "Consider enabling enforce_https=true for production."
            )

    for warning in warnings:
        logger.warning("SECURITY WARNING: %s", warning)

    if issues and _is_production():
        for issue in issues:
            logger.error("SECURITY ERROR: %s", issue)
        raise RuntimeError(
            "Application startup blocked due to security configuration issues. "
            "See logs for details."
        )
    elif issues:
        for issue in issues:
            logger.warning("SECURITY WARNING (development mode): %s", issue)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    _validate_security_configuration()

    settings.image_storage_path.mkdir(parents=True, exist_ok=True)

    await init_db()

    _background_tasks.append(asyncio.create_task(_run_token_cleanup()))
    if settings.notifications.enabled:
        _background_tasks.append(asyncio.create_task(_run_drink_window_checks()))
    logger.info("Started %d background task(s)", len(_background_tasks))

    yield

    for task in _background_tasks:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
    _background_tasks.clear()
    logger.info("Stopped background tasks")

    # Flush pending events
    posthog_service.shutdown()

    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Wine tasting journal with cellars, analytics and an AI sommelier",
    version=__version__,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Empty list means same-origin only
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Authorization", "Content-Type"],
        max_age=600,
    )

app.add_middleware(SecurityHeadersMiddleware)


@app.get("/health", tags=["Health"])
async def health_check() -> JSONResponse:
    """Health check endpoint. Reports 503 when the database is unreachable."""
    database_ok = await ping_db()
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "healthy" if database_ok else "degraded",
            "database": "ok" if database_ok else "unavailable",
            "version": __version__,
            "app_name": settings.app_name,
        },
    )


@app.get("/api/config/analytics", tags=["Configuration"])
async def get_analytics_config() -> JSONResponse:
    """PostHog settings for client-side analytics.

    Only the public project key is returned, which is safe to expose.
    """
    return JSONResponse(
        content={
            "enabled": settings.posthog_enabled,
            "host": settings.posthog_host,
            "api_key": settings.posthog_api_key or "",
        }
    )


from winejournal.routers import (  # noqa: E402
    ai,
    analytics,
    auth,
    cellars,
    images,
    reference,
    tastings,
    training,
    weather,
    wines,
)

app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(wines.router, prefix="/api/wines", tags=["Wines"])
app.include_router(tastings.router, prefix="/api/tastings", tags=["Tasting Sessions"])
app.include_router(cellars.router, prefix="/api/cellars", tags=["Cellars"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])
app.include_router(weather.router, prefix="/api/weather", tags=["Weather"])
app.include_router(ai.router, prefix="/api/ai", tags=["AI Sommelier"])
app.include_router(training.router, prefix="/api/training", tags=["Training"])
app.include_router(reference.router, prefix="/api/reference", tags=["Reference Data"])
app.include_router(images.router, prefix="/api/images", tags=["Images"])
