"""
tests.test_smoke

Minimal smoke tests to validate the service can boot and serve core endpoints.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"

    r = await client.get("/healthz")
    assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_dev_token_can_create_article(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/v1/dev/token", json={"subject": "user-dev", "email": "dev@example.com"}
    )
    assert r.status_code == 200
    token = r.json()["access_token"]

    r = await client.post(
        "/v1/articles",
        json={"title": "Hello", "content": "World"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert r.status_code == 201
