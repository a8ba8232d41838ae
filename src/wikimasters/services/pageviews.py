"""
wikimasters.services.pageviews

Pageview counters and milestone celebrations.

Responsibilities:
- Increment the per-article counter in the cache.
- Schedule (never await) a celebration when the new value is a milestone.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from wikimasters.cache.client import Cache
from wikimasters.observability.logging import get_logger

log = get_logger(__name__)


def pageview_key(article_id: int | str) -> str:
    return f"pageviews:article:{article_id}"


class MilestoneNotifier(Protocol):
    def notify(self, article_id: int, pageviews: int) -> object: ...


class PageviewService:
    def __init__(
        self,
        *,
        cache: Cache,
        notifier: MilestoneNotifier,
        milestones: Iterable[int],
    ) -> None:
        self._cache = cache
        self._notifier = notifier
        self._milestones = frozenset(milestones)

    async def increment_pageview(self, article_id: int) -> int:
        # INCR is atomic, so exactly one request observes each milestone value.
        value = await self._cache.incr(pageview_key(article_id))
        if value in self._milestones:
            log.info("pageview_milestone", article_id=article_id, pageviews=value)
            self._notifier.notify(article_id, value)
        return value
