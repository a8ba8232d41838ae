"""
wikimasters.db.repositories.articles

Repository for `Article` entities.

Responsibilities:
- CRUD on articles.
- Listing/detail queries joined with the author's display name.
- Author contact lookup for pageview celebrations.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Row, delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from wikimasters.db.models import Article, User


class ArticleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_with_authors(self) -> list[Row[Any]]:
        # Left join: an article whose author row is missing still lists with author=None.
        stmt = (
            select(
                Article.id,
                Article.title,
                Article.created_at,
                Article.content,
                Article.summary,
                User.name.label("author"),
            )
            .outerjoin(User, Article.author_id == User.id)
            .order_by(desc(Article.created_at), desc(Article.id))
        )
        return list((await self._session.execute(stmt)).all())

    async def get_with_author(self, article_id: int) -> Row[Any] | None:
        stmt = (
            select(
                Article.id,
                Article.title,
                Article.created_at,
                Article.content,
                Article.summary,
                Article.image_url,
                User.name.label("author"),
            )
            .outerjoin(User, Article.author_id == User.id)
            .where(Article.id == article_id)
        )
        return (await self._session.execute(stmt)).first()

    async def get_author_contact(self, article_id: int) -> Row[Any] | None:
        stmt = (
            select(
                Article.title,
                User.id.label("user_id"),
                User.email,
                User.name,
            )
            .outerjoin(User, Article.author_id == User.id)
            .where(Article.id == article_id)
        )
        return (await self._session.execute(stmt)).first()

    async def get(self, article_id: int) -> Article | None:
        return await self._session.get(Article, article_id)

    async def create(
        self,
        *,
        title: str,
        content: str,
        slug: str,
        author_id: str,
        image_url: str | None = None,
        summary: str | None = None,
        published: bool = True,
    ) -> Article:
        article = Article(
            title=title,
            content=content,
            slug=slug,
            author_id=author_id,
            image_url=image_url,
            summary=summary,
            published=published,
        )
        self._session.add(article)
        await self._session.flush()
        return article

    _UPDATABLE = frozenset({"title", "content", "image_url", "summary"})

    async def update(self, article_id: int, **values: Any) -> Article | None:
        """Apply exactly the given column values; an explicit None clears a nullable column."""
        unknown = set(values) - self._UPDATABLE
        if unknown:
            raise ValueError(f"not updatable: {sorted(unknown)}")
        article = await self._session.get(Article, article_id)
        if article is None:
            return None
        for name, value in values.items():
            setattr(article, name, value)
        await self._session.flush()
        return article

    async def delete(self, article_id: int) -> bool:
        result = await self._session.execute(delete(Article).where(Article.id == article_id))
        return bool(result.rowcount)

    async def author_id_of(self, article_id: int) -> str | None:
        stmt = select(Article.author_id).where(Article.id == article_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()
