"""
wikimasters.notifications.celebration

Pageview milestone celebration emails.

Responsibilities:
- Look up the article's author and send a "your article got N views" email.
- Run sends as background tasks so the triggering request never waits.
- Keep references to in-flight sends and drain them on shutdown.
"""

from __future__ import annotations

import asyncio
from html import escape

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wikimasters.db.repositories.articles import ArticleRepo
from wikimasters.notifications.email import EmailClient, EmailSendError
from wikimasters.observability.logging import get_logger
from wikimasters.settings import Settings

log = get_logger(__name__)


def render_celebration_html(
    *, name: str, article_title: str, article_url: str, pageviews: int
) -> str:
    return (
        f"<h1>Congrats, {escape(name)}!</h1>"
        f"<p>Your article <a href=\"{escape(article_url, quote=True)}\">"
        f"{escape(article_title)}</a> just reached {pageviews:,} views.</p>"
        "<p>You're an amazing author!</p>"
    )


async def send_celebration_email(
    *,
    session_factory: async_sessionmaker[AsyncSession],
    email: EmailClient,
    settings: Settings,
    article_id: int,
    pageviews: int,
) -> bool:
    """
    Send the milestone email for one article. Returns True when the provider
    accepted it. Lookup misses and provider failures are logged, never raised.
    """

    async with session_factory() as session:
        contact = await ArticleRepo(session).get_author_contact(article_id)

    if contact is None or not contact.email:
        log.info(
            "celebration_skipped",
            reason="no author email" if contact is not None else "article not found",
            article_id=article_id,
            pageviews=pageviews,
        )
        return False

    article_url = f"{settings.public_base_url.rstrip('/')}/wiki/{article_id}"
    try:
        await email.send(
            from_=settings.email_from,
            to=contact.email,
            subject=f"✨ Your article got {pageviews} views! ✨",
            html=render_celebration_html(
                name=contact.name or "Friend",
                article_title=contact.title,
                article_url=article_url,
                pageviews=pageviews,
            ),
        )
    except EmailSendError as e:
        log.error(
            "celebration_failed",
            user_id=contact.user_id,
            article_id=article_id,
            pageviews=pageviews,
            error=str(e),
        )
        return False

    log.info(
        "celebration_sent", user_id=contact.user_id, article_id=article_id, pageviews=pageviews
    )
    return True


class CelebrationNotifier:
    """
    Fire-and-forget scheduler for celebration emails.

    `notify` returns immediately. The event loop only holds weak references to
    tasks, so in-flight sends are kept in `_pending` until they finish.
    """

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        email: EmailClient,
        settings: Settings,
    ) -> None:
        self._session_factory = session_factory
        self._email = email
        self._settings = settings
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def notify(self, article_id: int, pageviews: int) -> asyncio.Task[bool]:
        task = asyncio.create_task(
            send_celebration_email(
                session_factory=self._session_factory,
                email=self._email,
                settings=self._settings,
                article_id=article_id,
                pageviews=pageviews,
            ),
            name=f"celebration:{article_id}:{pageviews}",
        )
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[bool]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            log.warning("celebration_cancelled", task=task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            log.error("celebration_crashed", task=task.get_name(), error=repr(exc))

    async def drain(self, timeout: float) -> None:
        if not self._pending:
            return
        done, not_done = await asyncio.wait(set(self._pending), timeout=timeout)
        for task in not_done:
            task.cancel()
        log.info("celebrations_drained", completed=len(done), cancelled=len(not_done))
