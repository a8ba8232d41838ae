"""
tests.test_article_cache

Cache-aside behaviour of the article listing.
"""

from __future__ import annotations

import json

import httpx
import pytest
from fakeredis import FakeAsyncRedis
from fastapi import FastAPI
from redis.exceptions import ConnectionError as RedisConnectionError

from wikimasters.api.deps import redis_from_app
from wikimasters.settings import Settings


class FlakyRedis:
    """Delegates to a fake Redis but fails reads and/or writes on demand."""

    def __init__(self, inner: FakeAsyncRedis, *, fail_get: bool = False, fail_set: bool = False):
        self._inner = inner
        self._fail_get = fail_get
        self._fail_set = fail_set
        self.set_attempts = 0

    async def get(self, key: str):
        if self._fail_get:
            raise RedisConnectionError("cache unavailable")
        return await self._inner.get(key)

    async def set(self, key: str, value: str, ex: int | None = None):
        self.set_attempts += 1
        if self._fail_set:
            raise RedisConnectionError("cache unavailable")
        return await self._inner.set(key, value, ex=ex)


async def _create(client: httpx.AsyncClient, headers: dict[str, str], title: str) -> int:
    r = await client.post(
        "/v1/articles", json={"title": title, "content": f"{title} body"}, headers=headers
    )
    assert r.status_code == 201
    return r.json()["id"]


@pytest.mark.asyncio
async def test_listing_is_served_from_cache_within_ttl(
    client: httpx.AsyncClient, fake_redis: FakeAsyncRedis, settings: Settings, auth_headers
) -> None:
    headers = auth_headers("user-1", name="Ada")
    await _create(client, headers, "First")

    r1 = await client.get("/v1/articles")
    assert r1.status_code == 200
    assert [a["title"] for a in r1.json()] == ["First"]
    assert r1.json()[0]["author"] == "Ada"

    ttl = await fake_redis.ttl(settings.articles_cache_key)
    assert 0 < ttl <= settings.articles_cache_ttl_seconds

    # A new article is not visible until the cached listing expires.
    await _create(client, headers, "Second")
    r2 = await client.get("/v1/articles")
    assert r2.json() == r1.json()

    await fake_redis.delete(settings.articles_cache_key)
    r3 = await client.get("/v1/articles")
    assert [a["title"] for a in r3.json()] == ["Second", "First"]


@pytest.mark.asyncio
async def test_cached_payload_is_returned_unmodified(
    client: httpx.AsyncClient, fake_redis: FakeAsyncRedis, settings: Settings
) -> None:
    cached = [
        {
            "id": 7,
            "title": "From cache",
            "content": "Only in Redis",
            "summary": "short",
            "created_at": "2024-01-02T03:04:05",
            "author": None,
        }
    ]
    await fake_redis.set(settings.articles_cache_key, json.dumps(cached), ex=60)

    r = await client.get("/v1/articles")
    assert r.status_code == 200
    assert r.json() == cached


@pytest.mark.asyncio
async def test_empty_cached_listing_is_a_hit(
    client: httpx.AsyncClient, fake_redis: FakeAsyncRedis, settings: Settings, auth_headers
) -> None:
    await fake_redis.set(settings.articles_cache_key, "[]", ex=60)
    await _create(client, auth_headers("user-1"), "Hidden")

    r = await client.get("/v1/articles")
    assert r.json() == []


@pytest.mark.asyncio
async def test_cache_write_failure_still_returns_listing(
    app: FastAPI, client: httpx.AsyncClient, fake_redis: FakeAsyncRedis, auth_headers
) -> None:
    await _create(client, auth_headers("user-1"), "Resilient")

    flaky = FlakyRedis(fake_redis, fail_set=True)
    app.dependency_overrides[redis_from_app] = lambda: flaky

    r = await client.get("/v1/articles")
    assert r.status_code == 200
    assert [a["title"] for a in r.json()] == ["Resilient"]
    assert flaky.set_attempts == 1


@pytest.mark.asyncio
async def test_cache_read_failure_falls_back_to_store(
    app: FastAPI, client: httpx.AsyncClient, fake_redis: FakeAsyncRedis, auth_headers
) -> None:
    await _create(client, auth_headers("user-1"), "Fallback")

    app.dependency_overrides[redis_from_app] = lambda: FlakyRedis(fake_redis, fail_get=True)

    r = await client.get("/v1/articles")
    assert r.status_code == 200
    assert [a["title"] for a in r.json()] == ["Fallback"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "corrupt",
    ["not-json{", '{"id": 1}', '[{"title": "missing fields"}]'],
)
async def test_corrupt_cached_listing_falls_back_and_is_rewritten(
    client: httpx.AsyncClient,
    fake_redis: FakeAsyncRedis,
    settings: Settings,
    auth_headers,
    corrupt: str,
) -> None:
    await _create(client, auth_headers("user-1"), "Recovered")
    await fake_redis.set(settings.articles_cache_key, corrupt, ex=60)

    r = await client.get("/v1/articles")
    assert r.status_code == 200
    assert [a["title"] for a in r.json()] == ["Recovered"]

    rewritten = json.loads(await fake_redis.get(settings.articles_cache_key))
    assert [a["title"] for a in rewritten] == ["Recovered"]
