"""
wikimasters.api.app

FastAPI app factory for the Wikimasters service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Create and dispose shared infrastructure (DB engine, Redis, HTTP client, notifier).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wikimasters import __version__
from wikimasters.api.routers.articles import router as articles_router
from wikimasters.api.routers.dev_auth import router as dev_auth_router
from wikimasters.api.routers.health import router as health_router
from wikimasters.cache.client import create_redis
from wikimasters.db.init_db import init_db
from wikimasters.db.session import create_engine, create_sessionmaker
from wikimasters.errors import WikiError
from wikimasters.notifications.celebration import CelebrationNotifier
from wikimasters.notifications.email import EmailClient
from wikimasters.observability.logging import configure_logging, get_logger
from wikimasters.observability.middleware import RequestContextMiddleware
from wikimasters.services.summaries import Summarizer
from wikimasters.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            await init_db(engine)

        app.state.redis = create_redis(settings)
        # One pooled client for all outbound provider calls (email, summaries).
        app.state.http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        app.state.summarizer = Summarizer(settings=settings, http=app.state.http)
        app.state.notifier = CelebrationNotifier(
            session_factory=app.state.sessionmaker,
            email=EmailClient(settings=settings, http=app.state.http),
            settings=settings,
        )
        if not settings.resend_api_key:
            log.warning("email_disabled", reason="WIKI_RESEND_API_KEY not set")

        try:
            yield
        finally:
            # Let in-flight celebrations finish before their clients go away.
            await app.state.notifier.drain(settings.notification_drain_timeout_seconds)
            await app.state.http.aclose()
            await app.state.redis.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Wikimasters",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(articles_router)

    @app.exception_handler(WikiError)
    async def _wiki_error(_: Request, exc: WikiError) -> JSONResponse:
        log.info("request_rejected", error=type(exc).__name__, detail=exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    return app


# --- Module Notes -----------------------------------------------------------
# Business rules stay in `services`; this module only wires resources and routes.
