"""Tests for structured logging helpers."""

import pytest
from httpx import AsyncClient

from camp_api.core.structured_logging import build_log_context


def test_build_log_context_includes_only_provided_fields():
    context = build_log_context(
        user_id="user-1",
        request_id="req-1",
        route="/campaigns",
        method="GET",
        status_code=200,
    )

    assert context == {
        "user_id": "user-1",
        "request_id": "req-1",
        "route": "/campaigns",
        "method": "GET",
        "status_code": 200,
    }


def test_build_log_context_ignores_empty_fields():
    context = build_log_context(
        user_id="",
        request_id="req-1",
    )

    assert context == {"request_id": "req-1"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "req-abc"})

    assert response.headers["X-Request-ID"] == "req-abc"


@pytest.mark.asyncio
async def test_request_id_is_generated(client: AsyncClient):
    response = await client.get("/health")

    assert response.headers["X-Request-ID"]
