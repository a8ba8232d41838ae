"""
wikimasters.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose app-scoped resources created in the lifespan (settings, DB, Redis, notifier).
- Build request-scoped services from them.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import redis.asyncio as redis
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wikimasters.cache.client import Cache
from wikimasters.notifications.celebration import CelebrationNotifier
from wikimasters.services.articles import ArticleService
from wikimasters.services.pageviews import PageviewService
from wikimasters.services.summaries import Summarizer
from wikimasters.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app factory pins its Settings instance on app.state.
    return request.app.state.settings


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


def redis_from_app(request: Request) -> redis.Redis:
    return request.app.state.redis


def cache_dep(client: redis.Redis = Depends(redis_from_app)) -> Cache:
    return Cache(client)


def notifier_from_app(request: Request) -> CelebrationNotifier:
    return request.app.state.notifier


def summarizer_from_app(request: Request) -> Summarizer:
    return request.app.state.summarizer


def article_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    cache: Cache = Depends(cache_dep),
    summarizer: Summarizer = Depends(summarizer_from_app),
) -> ArticleService:
    return ArticleService(session=session, settings=settings, cache=cache, summarizer=summarizer)


def pageview_service(
    cache: Cache = Depends(cache_dep),
    notifier: CelebrationNotifier = Depends(notifier_from_app),
    settings: Settings = Depends(settings_dep),
) -> PageviewService:
    return PageviewService(
        cache=cache, notifier=notifier, milestones=settings.pageview_milestones
    )


# --- Module Notes -----------------------------------------------------------
# Tests swap Redis and the notifier through `app.dependency_overrides` on
# `redis_from_app` / `notifier_from_app`.
