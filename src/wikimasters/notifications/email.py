"""
wikimasters.notifications.email

HTTP client boundary for the transactional email provider (Resend).

Responsibilities:
- Attach the provider API key.
- Send a single HTML email and surface failures as `EmailSendError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from wikimasters.settings import Settings


class EmailSendError(Exception):
    pass


class EmailClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._api_key = settings.resend_api_key
        self._base_url = settings.resend_base_url.rstrip("/")
        self._http = http

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def _authz(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    async def send(self, *, from_: str, to: str, subject: str, html: str) -> dict[str, Any]:
        if not self.enabled:
            raise EmailSendError("email disabled: no provider API key configured")
        try:
            r = await self._http.post(
                f"{self._base_url}/emails",
                headers=self._authz(),
                json={"from": from_, "to": [to], "subject": subject, "html": html},
            )
        except httpx.HTTPError as e:
            raise EmailSendError(f"transport error: {e}") from e
        if r.is_error:
            raise EmailSendError(f"provider returned {r.status_code}: {r.text}")
        try:
            return r.json()
        except ValueError as e:
            raise EmailSendError(f"provider returned a non-JSON body: {r.text[:200]}") from e
