"""
wikimasters.services.articles

Article service (transaction + authorization owner).

Responsibilities:
- Cache-aside listing of all articles (Redis in front of the store).
- Single-article reads.
- Create/update/delete with authentication and author-only edit rules.
- Best-effort summaries on write when a summarizer is configured.
"""

from __future__ import annotations

import secrets
import time
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from wikimasters.auth.models import Principal
from wikimasters.cache.client import Cache
from wikimasters.db.repositories.articles import ArticleRepo
from wikimasters.db.repositories.users import UserRepo
from wikimasters.errors import Forbidden, MissingInput, NotFound, Unauthorized
from wikimasters.observability.logging import get_logger
from wikimasters.schemas import (
    ActionResult,
    ArticleDetail,
    ArticleListItem,
    CreateArticleInput,
    UpdateArticleInput,
)
from wikimasters.services.summaries import Summarizer, SummaryError
from wikimasters.settings import Settings

log = get_logger(__name__)


def new_slug() -> str:
    # Millisecond timestamp keeps slugs roughly ordered; the suffix avoids same-ms collisions.
    return f"{int(time.time() * 1000)}-{secrets.token_hex(3)}"


class ArticleService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
        cache: Cache,
        summarizer: Summarizer | None = None,
    ) -> None:
        self._session = session
        self._settings = settings
        self._cache = cache
        self._summarizer = summarizer

        self._articles = ArticleRepo(session)
        self._users = UserRepo(session)

    # -- reads -----------------------------------------------------------------

    async def list_articles(self) -> list[ArticleListItem]:
        key = self._settings.articles_cache_key
        try:
            cached = await self._cache.get_json(key)
            if cached is not None:
                if not isinstance(cached, list):
                    raise ValueError(f"cached listing is a {type(cached).__name__}, not a list")
                hit = [ArticleListItem.model_validate(item) for item in cached]
                log.info("articles_cache_hit", key=key)
                return hit
        except (RedisError, ValueError, ValidationError) as e:
            # Unreachable or corrupt entries fall through to the store and get rewritten.
            log.warning("articles_cache_read_failed", key=key, error=str(e))

        log.info("articles_cache_miss", key=key)
        rows = await self._articles.list_with_authors()
        articles = [ArticleListItem.model_validate(row._mapping) for row in rows]

        try:
            await self._cache.set_json(
                key,
                [a.model_dump(mode="json") for a in articles],
                ex=self._settings.articles_cache_ttl_seconds,
            )
        except RedisError as e:
            log.warning("articles_cache_write_failed", key=key, error=str(e))

        return articles

    async def get_article(self, article_id: int) -> ArticleDetail | None:
        row = await self._articles.get_with_author(article_id)
        return ArticleDetail.model_validate(row._mapping) if row is not None else None

    # -- authorization ---------------------------------------------------------

    async def authorize_user_to_edit_article(self, user_id: str, article_id: int) -> bool:
        author_id = await self._articles.author_id_of(article_id)
        return author_id is not None and author_id == user_id

    async def _require_editor(self, principal: Principal | None, article_id: int) -> Principal:
        if principal is None:
            raise Unauthorized("Unauthorized")
        if await self._articles.get(article_id) is None:
            raise NotFound(f"Article {article_id} not found")
        if principal.is_admin:
            return principal
        if not await self.authorize_user_to_edit_article(principal.subject, article_id):
            raise Forbidden("Forbidden")
        return principal

    # -- writes ----------------------------------------------------------------

    async def _summarize(self, title: str, content: str) -> str | None:
        if self._summarizer is None or not self._summarizer.enabled:
            return None
        try:
            return await self._summarizer.summarize_article(title, content) or None
        except (SummaryError, MissingInput) as e:
            log.warning("article_summary_failed", error=str(e))
            return None

    async def create_article(
        self, principal: Principal | None, data: CreateArticleInput
    ) -> ActionResult:
        if principal is None:
            raise Unauthorized("Unauthorized")

        await self._users.ensure_exists(
            user_id=principal.subject, name=principal.name, email=principal.email
        )
        article = await self._articles.create(
            title=data.title,
            content=data.content,
            slug=new_slug(),
            author_id=principal.subject,
            image_url=data.image_url,
            summary=await self._summarize(data.title, data.content),
            published=True,
        )
        await self._session.commit()

        log.info("article_created", article_id=article.id, author_id=principal.subject)
        return ActionResult(message="Article created", id=article.id)

    async def update_article(
        self, principal: Principal | None, article_id: int, data: UpdateArticleInput
    ) -> ActionResult:
        principal = await self._require_editor(principal, article_id)

        changes: dict[str, Any] = {}
        if data.title is not None:
            changes["title"] = data.title
        if data.content is not None:
            changes["content"] = data.content
        # An explicit `"image_url": null` clears the image; omitting the field keeps it.
        if "image_url" in data.model_fields_set:
            changes["image_url"] = data.image_url

        if "title" in changes or "content" in changes:
            current = await self._articles.get(article_id)
            summary = await self._summarize(
                changes.get("title", current.title),
                changes.get("content", current.content),
            )
            if summary is not None:
                changes["summary"] = summary

        await self._articles.update(article_id, **changes)
        await self._session.commit()

        log.info("article_updated", article_id=article_id, editor_id=principal.subject)
        return ActionResult(message=f"Article {article_id} updated", id=article_id)

    async def delete_article(self, principal: Principal | None, article_id: int) -> ActionResult:
        principal = await self._require_editor(principal, article_id)

        await self._articles.delete(article_id)
        await self._session.commit()

        log.info("article_deleted", article_id=article_id, editor_id=principal.subject)
        return ActionResult(message=f"Article {article_id} deleted", id=article_id)

    async def delete_article_form(
        self, principal: Principal | None, form: Mapping[str, Any]
    ) -> ActionResult:
        raw_id = form.get("id")
        if raw_id is None or not str(raw_id).strip():
            raise MissingInput("Missing article id")
        try:
            article_id = int(str(raw_id).strip())
        except ValueError as e:
            raise MissingInput(f"Invalid article id: {raw_id!r}") from e
        return await self.delete_article(principal, article_id)


# --- Module Notes -----------------------------------------------------------
# Writes do not invalidate `articles:all`; the listing converges once the
# entry expires (see `Settings.articles_cache_ttl_seconds`).
