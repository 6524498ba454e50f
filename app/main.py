"""AboutBlank Sync API - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.log import configure_logging
from app.core.middleware import BodySizeLimitMiddleware, security_headers_middleware
from app.core.rate_limit import InMemoryRateLimiter, build_rules, rate_limit_middleware
from app.db.base import Base
from app.db.session import build_engine, build_sessionmaker
from app.routers import api, community, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    engine = build_engine(settings)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)

    if settings.auto_create_schema:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    logger.info("%s running on port %s", settings.app_name, settings.port)
    logger.info(
        "Rate limiting: %s req/%ss per IP, strict %s req/%ss",
        settings.rate_limit_api_requests,
        settings.rate_limit_api_window_seconds,
        settings.rate_limit_strict_requests,
        settings.rate_limit_strict_window_seconds,
    )
    if not settings.is_sqlite:
        logger.info("Connection pool size: %s", settings.db_pool_size)

    try:
        yield
    finally:
        # uvicorn only gets here after in-flight requests have finished
        logger.info("Shutting down, draining connection pool")
        await engine.dispose()
        logger.info("Connection pool closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Cloud backup sync for recovery progress, cravings and challenges",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_limiter = InMemoryRateLimiter()
    app.state.rate_limit_rules = build_rules(settings)

    register_exception_handlers(app)

    # innermost first: the last one added sees the request first
    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
    app.middleware("http")(security_headers_middleware)
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.middleware("http")(rate_limit_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset", "Retry-After"],
    )

    app.include_router(health.router)
    app.include_router(api.router)
    app.include_router(community.router)
    return app


app = create_app()
