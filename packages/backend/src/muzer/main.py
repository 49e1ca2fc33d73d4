"""FastAPI application factory.

create_app() returns a configured FastAPI instance. The lifespan
connects Redis (optional) on startup and releases Redis and the
database pool on shutdown. Middleware, error handlers and routers are
all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from muzer import __version__
from muzer.api import api_router
from muzer.config import settings
from muzer.errors import register_exception_handlers

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "muzer.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from muzer.db.redis import close_redis, init_redis
    try:
        await init_redis()
        logger.info("muzer.redis_connected", url=settings.redis_url)
    except Exception as e:
        # Redis only backs rate limiting; the API works without it
        logger.warning("muzer.redis_unavailable", error=str(e))

    yield

    logger.info("muzer.shutdown")
    await close_redis()

    from muzer.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Muzer Spaces",
        description="Session-scoped spaces and app tokens",
        version=__version__,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: RequestId → Security → RateLimit → CORS → handler

    from muzer.middleware.rate_limit import RateLimitMiddleware
    from muzer.middleware.request_id import RequestIdMiddleware
    from muzer.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        token_rpm=settings.rate_limit_token_rpm,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: muzer.main:app)
app = create_app()
