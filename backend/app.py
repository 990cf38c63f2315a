"""FastAPI application entry point for the Podsite API."""

import logging
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from config import Settings, settings
from errors import register_error_handlers
from middleware.rate_limit import RateLimitMiddleware, client_key
from middleware.response_cache import ResponseCacheMiddleware
from services.cache import TTLCache
from services.content import ContentService
from services.episodes import EpisodeDirectory
from services.rate_limit import RateLimiter

_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=_log_level,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=_log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = app.state
    logger.info(
        "Starting Podsite API in %s mode (%d episodes, CORS origins: %s)",
        state.settings.environment,
        len(state.episodes),
        state.settings.cors_origins,
    )
    state.cache.start()
    state.rate_limiter.start()

    yield

    logger.info("Shutting down Podsite API")
    await state.rate_limiter.stop()
    await state.cache.stop()


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings

    problems = app_settings.validate()
    if problems:
        raise ValueError(f"Invalid configuration: {'; '.join(problems)}")
    if not Path(app_settings.content_dir).is_dir():
        logger.warning("CONTENT_DIR %r does not exist; using built-in content", app_settings.content_dir)

    app = FastAPI(title="Podsite API", version="2.0.0", lifespan=lifespan)

    app.state.settings = app_settings
    app.state.started_at = time.monotonic()
    app.state.episodes = EpisodeDirectory.load(Path(app_settings.content_dir) / "episodes.json")
    app.state.content = ContentService.load(app_settings.content_dir)
    app.state.cache = TTLCache(sweep_interval=app_settings.cache_sweep_interval_seconds)
    app.state.rate_limiter = RateLimiter(
        limit=app_settings.rate_limit_requests,
        window=app_settings.rate_limit_window_seconds,
        sweep_interval=app_settings.rate_limit_sweep_interval_seconds,
    )

    # Middleware is listed innermost first: each add wraps the previous ones.
    app.add_middleware(
        ResponseCacheMiddleware,
        cache=app.state.cache,
        ttl=app_settings.cache_ttl_seconds,
        path_prefix="/api",
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=app.state.rate_limiter,
        trust_proxy_headers=app_settings.trust_proxy_headers,
        path_prefix="/api",
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'self'"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization", "X-Requested-With"],
        max_age=86400,
    )

    # Request logging (outermost, so it sees the final status)
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        latency_ms = (time.perf_counter() - start) * 1000
        status = response.status_code
        level = logging.ERROR if status >= 500 else logging.WARNING if status >= 400 else logging.INFO
        logger.log(
            level,
            "%s %s%s %d %.2fms client=%s ua=%r",
            request.method,
            request.url.path,
            f"?{request.url.query}" if request.url.query else "",
            status,
            latency_ms,
            client_key(request.scope, app_settings.trust_proxy_headers),
            request.headers.get("user-agent", ""),
        )
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.content import router as content_router
    from routes.episodes import router as episodes_router
    from routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(episodes_router)
    app.include_router(content_router)

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
