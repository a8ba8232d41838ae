"""
wikimasters.db.init_db

DB initialization helper for dev and test.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from wikimasters.db import models  # noqa: F401  # register tables on Base.metadata
from wikimasters.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    # Tables are managed outside the service in prod; dev/test create them on startup.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
