"""
wikimasters.db.models

Persistence schema for the wiki.

Responsibilities:
- `User`: local mirror of identity provider users (id, name, email).
- `Article`: authored wiki pages, many-to-one with `User`.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wikimasters.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps keep SQLite and Postgres behaviour identical.
    return datetime.utcnow()


class User(Base):
    __tablename__ = "users"

    # Identity provider subject; not generated locally.
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    articles: Mapped[list[Article]] = relationship(back_populates="author")


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    author_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    author: Mapped[User] = relationship(back_populates="articles")

    __table_args__ = (Index("ix_articles_created", "created_at"),)
