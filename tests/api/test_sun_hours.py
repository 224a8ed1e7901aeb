"""Tests for sun-hours resolution and its endpoint."""

from __future__ import annotations

import httpx
import pytest
from httpx import AsyncClient

from solargrind_api.config import settings
from solargrind_api.services import sun_hours_service
from solargrind_api.services.sun_hours_service import resolve_sun_hours

pytestmark = pytest.mark.asyncio


def _fake_nrel(result=None, exc: Exception | None = None):
    async def fake(lat, lon, api_key, **kwargs):
        if exc is not None:
            raise exc
        return result

    return fake


class TestResolveSunHours:
    async def test_default_without_coordinates(self, monkeypatch):
        monkeypatch.setattr(settings, "default_peak_sun_hours", 4.5)
        result = await resolve_sun_hours(None, None)
        assert result.sun_hours == pytest.approx(4.5)
        assert result.source == "default"

    async def test_estimation_without_key(self, monkeypatch):
        monkeypatch.setattr(settings, "nrel_api_key", "")
        result = await resolve_sun_hours(40.0, -105.0)
        assert result.sun_hours == pytest.approx(4.0)
        assert result.source == "estimation"

    async def test_nrel_value_used(self, monkeypatch):
        monkeypatch.setattr(settings, "nrel_api_key", "key")
        monkeypatch.setattr(sun_hours_service, "fetch_nrel_sun_hours", _fake_nrel(5.37))
        result = await resolve_sun_hours(30.27, -97.74)
        assert result.sun_hours == pytest.approx(5.37)
        assert result.source == "nrel_api"

    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectError("boom"),
            httpx.ReadTimeout("slow"),
            ValueError("NREL response has no annual avg_ghi value"),
        ],
    )
    async def test_nrel_failure_falls_back(self, monkeypatch, caplog, exc):
        monkeypatch.setattr(settings, "nrel_api_key", "key")
        monkeypatch.setattr(sun_hours_service, "fetch_nrel_sun_hours", _fake_nrel(exc=exc))
        result = await resolve_sun_hours(20.0, -100.0)
        assert result.sun_hours == pytest.approx(5.0)
        assert result.source == "estimation_fallback"
        assert "NREL lookup failed" in caplog.text


class TestSunHoursEndpoint:
    async def test_latitude_estimate(self, client: AsyncClient):
        resp = await client.post("/api/v1/sun-hours", json={"latitude": 30.0, "longitude": -97.7})
        assert resp.status_code == 200
        data = resp.json()
        assert data["sunHours"] == pytest.approx(4.5)
        assert data["source"] == "estimation"
        assert data["latitude"] == 30.0

    @pytest.mark.parametrize("body", [{}, {"latitude": 30.0}, {"longitude": -97.7}])
    async def test_coordinates_required(self, client: AsyncClient, body):
        resp = await client.post("/api/v1/sun-hours", json=body)
        assert resp.status_code == 422

    async def test_latitude_out_of_range(self, client: AsyncClient):
        resp = await client.post("/api/v1/sun-hours", json={"latitude": 95, "longitude": 0})
        assert resp.status_code == 422

    async def test_rate_limited(self, client: AsyncClient):
        from solargrind_api.core.rate_limit import sun_hours_limiter

        body = {"latitude": 30.0, "longitude": -97.7}
        for _ in range(sun_hours_limiter.max_requests):
            assert (await client.post("/api/v1/sun-hours", json=body)).status_code == 200
        resp = await client.post("/api/v1/sun-hours", json=body)
        assert resp.status_code == 429
        assert "sun-hours" in resp.json()["detail"]
