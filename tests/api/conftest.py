"""API test infrastructure: async httpx client against the ASGI app."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from solargrind_api.config import settings


@pytest_asyncio.fixture
async def app(monkeypatch):
    from solargrind_api.core.rate_limit import report_limiter, sun_hours_limiter
    from solargrind_api.main import create_app

    # Never reach the real NREL API from tests
    monkeypatch.setattr(settings, "nrel_api_key", "")

    application = create_app()

    report_limiter.reset()
    sun_hours_limiter.reset()

    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
