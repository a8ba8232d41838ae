"""
wikimasters.services.summaries

Article summaries from an OpenAI-compatible chat completions API.
"""

from __future__ import annotations

import httpx

from wikimasters.errors import MissingInput
from wikimasters.settings import Settings

SYSTEM_PROMPT = "You are an assistant that writes concise factual summaries."


def build_prompt(title: str, article: str) -> str:
    return (
        "Summarize the following wiki article in 1-2 concise sentences. Focus on the main "
        "idea and the most important details a reader should remember. Do not add opinions "
        "or unrelated information. Readers should be able to glance at the summary and "
        "decide whether to read more.\n\n"
        f"Title:\n{title}\n\nArticle:\n{article}"
    )


class SummaryError(Exception):
    pass


class Summarizer:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._api_key = settings.summary_api_key
        self._base_url = settings.summary_base_url.rstrip("/")
        self._model = settings.summary_model
        self._http = http

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def summarize_article(self, title: str, article: str) -> str:
        if not article or not article.strip():
            raise MissingInput("Article content is required to generate a summary.")
        if not self.enabled:
            raise SummaryError("summaries disabled: no API key configured")

        try:
            r = await self._http.post(
                f"{self._base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={
                    "model": self._model,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": build_prompt(title, article)},
                    ],
                },
            )
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise SummaryError(str(e)) from e

        try:
            choices = r.json().get("choices") or []
            text = choices[0].get("message", {}).get("content") if choices else None
            return (text or "").strip()
        except (ValueError, KeyError, AttributeError, IndexError, TypeError) as e:
            raise SummaryError(f"malformed completion response: {e}") from e
