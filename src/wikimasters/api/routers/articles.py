"""
wikimasters.api.routers.articles

Public and author endpoints for wiki articles.

Responsibilities:
- Cached article listing and single-article reads (anonymous).
- Create/update/delete for authenticated authors.
- Form-friendly delete that redirects back to the home page.
- Pageview increments that may trigger a celebration email.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from starlette.status import HTTP_201_CREATED, HTTP_303_SEE_OTHER, HTTP_404_NOT_FOUND

from wikimasters.api.deps import article_service, pageview_service
from wikimasters.auth.deps import get_optional_principal
from wikimasters.auth.models import Principal
from wikimasters.schemas import (
    ActionResult,
    ArticleDetail,
    ArticleListItem,
    CreateArticleInput,
    PageviewResponse,
    UpdateArticleInput,
)
from wikimasters.services.articles import ArticleService
from wikimasters.services.pageviews import PageviewService

router = APIRouter(prefix="/v1/articles", tags=["articles"])


@router.get("", response_model=list[ArticleListItem])
async def list_articles(
    svc: ArticleService = Depends(article_service),
) -> list[ArticleListItem]:
    return await svc.list_articles()


@router.get("/{article_id}", response_model=ArticleDetail)
async def get_article(
    article_id: int,
    svc: ArticleService = Depends(article_service),
) -> ArticleDetail:
    article = await svc.get_article(article_id)
    if article is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Article not found")
    return article


@router.post("", response_model=ActionResult, status_code=HTTP_201_CREATED)
async def create_article(
    body: CreateArticleInput,
    principal: Principal | None = Depends(get_optional_principal),
    svc: ArticleService = Depends(article_service),
) -> ActionResult:
    return await svc.create_article(principal, body)


@router.post("/delete-form", response_class=RedirectResponse)
async def delete_article_form(
    request: Request,
    principal: Principal | None = Depends(get_optional_principal),
    svc: ArticleService = Depends(article_service),
) -> RedirectResponse:
    form = await request.form()
    await svc.delete_article_form(principal, form)
    return RedirectResponse(url="/", status_code=HTTP_303_SEE_OTHER)


@router.patch("/{article_id}", response_model=ActionResult)
async def update_article(
    article_id: int,
    body: UpdateArticleInput,
    principal: Principal | None = Depends(get_optional_principal),
    svc: ArticleService = Depends(article_service),
) -> ActionResult:
    return await svc.update_article(principal, article_id, body)


@router.delete("/{article_id}", response_model=ActionResult)
async def delete_article(
    article_id: int,
    principal: Principal | None = Depends(get_optional_principal),
    svc: ArticleService = Depends(article_service),
) -> ActionResult:
    return await svc.delete_article(principal, article_id)


@router.post("/{article_id}/pageviews", response_model=PageviewResponse)
async def increment_pageview(
    article_id: int,
    svc: PageviewService = Depends(pageview_service),
) -> PageviewResponse:
    # Returns as soon as the counter is bumped; any celebration email runs in the background.
    pageviews = await svc.increment_pageview(article_id)
    return PageviewResponse(article_id=article_id, pageviews=pageviews)
