"""
wikimasters.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Liveness probe (`/healthz`).
- Readiness probe (`/readyz`) checking the database and the cache.
"""

from __future__ import annotations

import redis.asyncio as redis
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from wikimasters.api.deps import db_session, redis_from_app

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    client: redis.Redis = Depends(redis_from_app),
) -> dict[str, str]:
    await session.execute(text("SELECT 1"))
    await client.ping()
    return {"status": "ready"}
