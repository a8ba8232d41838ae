"""
wikimasters.errors

Domain errors raised by the service layer.

Responsibilities:
- Name the small set of failures callers can observe.
- Carry the HTTP status each one maps to at the API boundary.
"""

from __future__ import annotations


class WikiError(Exception):
    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class Unauthorized(WikiError):
    status_code = 401


class Forbidden(WikiError):
    status_code = 403


class NotFound(WikiError):
    status_code = 404


class MissingInput(WikiError):
    status_code = 400


# --- Module Notes -----------------------------------------------------------
# Best-effort side effects (cache writes, summaries, emails) never raise these;
# they log and carry on. See `api.app` for the exception handler.
