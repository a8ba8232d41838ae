"""
wikimasters.cache.client

Async Redis wrapper used by the article listing and pageview counters.

Responsibilities:
- Build the shared `redis.asyncio` client from settings.
- Read/write JSON values with an expiry.
- Atomic counter increments.
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as redis

from wikimasters.settings import Settings


def create_redis(settings: Settings) -> redis.Redis:
    # Connections are opened lazily on first command; nothing blocks at startup.
    return redis.Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )


class Cache:
    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    async def get_json(self, key: str) -> Any | None:
        raw = await self._client.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set_json(self, key: str, value: Any, *, ex: int) -> None:
        await self._client.set(key, json.dumps(value), ex=ex)

    async def incr(self, key: str) -> int:
        return int(await self._client.incr(key))


# --- Module Notes -----------------------------------------------------------
# Error policy is the caller's: the listing swallows cache failures, pageview
# increments let them propagate.
