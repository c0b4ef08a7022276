import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.rate_limiter import InMemoryRateLimiter
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the database schema on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def build_rate_limiter() -> InMemoryRateLimiter | None:
    """Return the limiter configured by the environment, or ``None`` when disabled."""

    settings = get_settings()
    if not settings.rate_limit_enabled:
        logger.info("Request rate limiting is disabled")
        return None
    return InMemoryRateLimiter(
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
        sweep_interval_seconds=settings.rate_limit_sweep_seconds,
    )


def create_app(rate_limiter: InMemoryRateLimiter | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(lifespan=lifespan)
    app.state.rate_limiter = rate_limiter if rate_limiter is not None else build_rate_limiter()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
