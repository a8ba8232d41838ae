"""
tests.conftest

Shared fixtures: a fully started app on a temporary SQLite DB, an in-memory
Redis, and helpers for minting bearer tokens.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis, FakeServer
from fastapi import FastAPI

from wikimasters.api.app import create_app
from wikimasters.api.deps import redis_from_app
from wikimasters.auth.jwt import JwtConfig, issue_token
from wikimasters.settings import Settings


class RecordingNotifier:
    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def notify(self, article_id: int, pageviews: int) -> None:
        self.calls.append((article_id, pageviews))


@pytest.fixture
def recording_notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'wiki.db'}",
        jwt_secret="test-secret",
        resend_api_key=None,
        summary_api_key=None,
    )


@pytest.fixture
def fake_redis() -> FakeAsyncRedis:
    return FakeAsyncRedis(server=FakeServer(), decode_responses=True)


@pytest_asyncio.fixture
async def app(settings: Settings, fake_redis: FakeAsyncRedis) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    app.dependency_overrides[redis_from_app] = lambda: fake_redis
    # httpx's ASGITransport does not run lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(settings: Settings):
    def _headers(
        subject: str,
        *,
        email: str | None = None,
        name: str | None = None,
        roles: tuple[str, ...] = (),
    ) -> dict[str, str]:
        token = issue_token(
            cfg=JwtConfig.from_settings(settings),
            subject=subject,
            roles=list(roles),
            email=email,
            name=name,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
