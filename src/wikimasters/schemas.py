"""
wikimasters.schemas

Request/response models shared by the API and service layers.

Responsibilities:
- Shape article listings/details (also the cached JSON form of the listing).
- Validate article write inputs.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ArticleListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    summary: str | None = None
    created_at: datetime
    author: str | None = None


class ArticleDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    summary: str | None = None
    created_at: datetime
    author: str | None = None
    image_url: str | None = None


class CreateArticleInput(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    image_url: str | None = Field(default=None, max_length=2048)


class UpdateArticleInput(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    image_url: str | None = Field(default=None, max_length=2048)


class ActionResult(BaseModel):
    success: bool = True
    message: str
    id: int | None = None


class PageviewResponse(BaseModel):
    article_id: int
    pageviews: int
