"""
wikimasters.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Let public routes accept anonymous callers while still rejecting bad tokens.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from wikimasters.api.deps import settings_dep
from wikimasters.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from wikimasters.auth.models import Principal
from wikimasters.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def _principal_from_token(token: str, settings: Settings) -> Principal:
    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=token)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not isinstance(roles_raw, list):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token roles")

    email = payload.get("email")
    name = payload.get("name")
    return Principal(
        subject=subject,
        roles=frozenset(str(r) for r in roles_raw),
        email=str(email) if email else None,
        name=str(name) if name else None,
    )


def get_optional_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Principal | None:
    # No token means anonymous; a present but invalid token is still a 401.
    if creds is None or not creds.credentials:
        return None
    return _principal_from_token(creds.credentials, settings)


# --- Module Notes -----------------------------------------------------------
# Article writes take `get_optional_principal` and let the service raise
# `Unauthorized`, so the rule lives next to the ownership check.
