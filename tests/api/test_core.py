"""Tests for structured logging and rate limiting."""

from __future__ import annotations

import json
import logging

import pytest
from fastapi import HTTPException
from httpx import AsyncClient
from starlette.requests import Request

from solargrind_api.config import settings
from solargrind_api.core.logging import ACCESS_LOGGER, JSONFormatter, request_id_var
from solargrind_api.core.rate_limit import RateLimiter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("solargrind_api.api.v1.quotes", logging.INFO, __file__, 1,
                               "Quote %s", ("ok",), None)
    for key, val in extra.items():
        setattr(record, key, val)
    return record


def _request(client_host: str = "203.0.113.5", forwarded: str | None = None) -> Request:
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({
        "type": "http",
        "method": "POST",
        "path": "/api/v1/quotes/report",
        "headers": headers,
        "client": (client_host, 50000),
    })


class TestJSONFormatter:
    def test_quote_fields_lifted(self):
        entry = json.loads(JSONFormatter().format(
            _record(panel_count=22, sun_hours_source="nrel_api", system_size_kw=9.68)
        ))
        assert entry["message"] == "Quote ok"
        assert entry["panel_count"] == 22
        assert entry["sun_hours_source"] == "nrel_api"
        assert entry["system_size_kw"] == 9.68

    def test_unknown_extras_ignored(self):
        entry = json.loads(JSONFormatter().format(_record(client_ip="203.0.113.5")))
        assert "client_ip" not in entry

    def test_request_id_included(self):
        token = request_id_var.set("abc123")
        try:
            entry = json.loads(JSONFormatter().format(_record()))
        finally:
            request_id_var.reset(token)
        assert entry["request_id"] == "abc123"


@pytest.mark.asyncio
class TestRequestLogging:
    async def test_quote_log_carries_fields(self, client: AsyncClient, quote_payload, caplog):
        caplog.set_level(logging.INFO)
        resp = await client.post("/api/v1/quotes", json=quote_payload)
        assert resp.status_code == 200

        quote_records = [r for r in caplog.records if r.name == "solargrind_api.api.v1.quotes"]
        assert len(quote_records) == 1
        assert quote_records[0].panel_count == 22
        assert quote_records[0].sun_hours_source == "request"

    async def test_access_log(self, client: AsyncClient, quote_payload, caplog):
        caplog.set_level(logging.INFO)
        await client.post("/api/v1/quotes", json=quote_payload)
        access = [r for r in caplog.records if r.name == ACCESS_LOGGER]
        assert access[-1].status_code == 200
        assert access[-1].path == "/api/v1/quotes"

    async def test_health_not_logged_at_info(self, client: AsyncClient, caplog):
        caplog.set_level(logging.INFO)
        await client.get("/health")
        assert not [r for r in caplog.records if r.name == ACCESS_LOGGER]


class TestRateLimiter:
    def test_allows_up_to_limit(self):
        limiter = RateLimiter("test", max_requests=2)
        limiter.check(_request())
        limiter.check(_request())
        with pytest.raises(HTTPException) as info:
            limiter.check(_request())
        assert info.value.status_code == 429
        assert "Retry-After" in info.value.headers

    def test_window_expiry(self):
        clock = iter([100.0, 100.5, 161.0])
        limiter = RateLimiter("test", max_requests=2, window_seconds=60, clock=lambda: next(clock))
        limiter.check(_request())
        limiter.check(_request())
        limiter.check(_request())

    def test_forwarded_for_used_when_trusted(self, monkeypatch):
        monkeypatch.setattr(settings, "trust_forwarded_for", True)
        limiter = RateLimiter("test", max_requests=1)
        assert limiter.client_key(_request(forwarded="198.51.100.1, 10.0.0.1")) == "198.51.100.1"

    def test_forwarded_for_ignored_when_untrusted(self, monkeypatch):
        monkeypatch.setattr(settings, "trust_forwarded_for", False)
        limiter = RateLimiter("test", max_requests=1)
        assert limiter.client_key(_request(forwarded="198.51.100.1")) == "203.0.113.5"
