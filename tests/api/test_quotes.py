"""Tests for the quote endpoints."""

from __future__ import annotations

import copy
import time

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


# ======================================================================
# POST /api/v1/quotes
# ======================================================================


class TestCreateQuote:
    async def test_bill_scenario(self, client: AsyncClient, quote_payload):
        resp = await client.post("/api/v1/quotes", json=quote_payload)
        assert resp.status_code == 200
        data = resp.json()
        assert data["panelCount"] == 22
        assert data["systemSizeKw"] == pytest.approx(9.68)
        assert 8 <= data["systemSizeKw"] <= 10
        assert data["usage"]["monthlyKwh"] == pytest.approx(1250.0)
        assert data["usage"]["source"] == "bill"
        assert len(data["monthlyProductionKwh"]) == 12
        assert sum(data["monthlyProductionKwh"]) == pytest.approx(data["annualProductionKwh"], abs=6)
        assert data["performanceRatio"] == pytest.approx(0.85)
        assert data["sunHoursSource"] == "request"
        assert data["monthlyLoanPayment"] is None
        assert data["loan"] is None
        assert len(data["yearlyProjection"]) == 25

    async def test_money_fields(self, client: AsyncClient, quote_payload):
        data = (await client.post("/api/v1/quotes", json=quote_payload)).json()
        assert data["systemCost"] == pytest.approx(9680 * 3.55, abs=0.01)
        assert data["incentivesTotal"] == pytest.approx(data["federalCredit"], abs=0.01)
        assert data["netCost"] == pytest.approx(data["systemCost"] - data["incentivesTotal"], abs=0.02)
        assert data["paybackYears"] == pytest.approx(data["netCost"] / data["annualSavings"], abs=0.01)
        assert data["co2TonsPerYear"] == pytest.approx(data["annualProductionKwh"] * 0.0004, abs=0.001)
        assert data["treesEquivalentPerYear"] == pytest.approx(data["co2TonsPerYear"] * 16, abs=0.1)

    async def test_loan_apr_percent(self, client: AsyncClient, quote_payload):
        payload = copy.deepcopy(quote_payload)
        payload["financing"] = {"method": "loan", "aprPercent": 7.99, "termMonths": 300}
        resp = await client.post("/api/v1/quotes", json=payload)
        assert resp.status_code == 200
        data = resp.json()
        loan = data["loan"]
        assert loan["aprPercent"] == pytest.approx(7.99)
        assert loan["termMonths"] == 300
        assert loan["principal"] == pytest.approx(data["netCost"], abs=0.01)
        r = 0.0799 / 12
        expected = loan["principal"] * r * (1 + r) ** 300 / ((1 + r) ** 300 - 1)
        assert data["monthlyLoanPayment"] == pytest.approx(expected, abs=0.01)
        assert len(loan["schedule"]) == 25

    async def test_heuristic_usage(self, client: AsyncClient, quote_payload):
        payload = copy.deepcopy(quote_payload)
        payload["usageProfile"] = {
            "electricityRate": 0.14,
            "squareFootage": 2400,
            "occupants": 4,
            "hasPool": True,
            "hasEV": True,
            "heatingType": "electric",
        }
        data = (await client.post("/api/v1/quotes", json=payload)).json()
        assert data["usage"]["source"] == "heuristic"
        expected = (2400 * 0.35 + 4 * 75) * 1.25 + 150 + 200
        assert data["usage"]["monthlyKwh"] == pytest.approx(expected, abs=0.1)

    async def test_sun_hours_from_latitude(self, client: AsyncClient, quote_payload):
        payload = copy.deepcopy(quote_payload)
        del payload["siteProfile"]["peakSunHours"]
        payload["siteProfile"].update({"latitude": 30.0, "longitude": -97.7})
        data = (await client.post("/api/v1/quotes", json=payload)).json()
        assert data["peakSunHours"] == pytest.approx(4.5)
        assert data["sunHoursSource"] == "estimation"

    async def test_sun_hours_default(self, client: AsyncClient, quote_payload):
        payload = copy.deepcopy(quote_payload)
        del payload["siteProfile"]["peakSunHours"]
        data = (await client.post("/api/v1/quotes", json=payload)).json()
        assert data["peakSunHours"] == pytest.approx(4.5)
        assert data["sunHoursSource"] == "default"

    async def test_snake_case_accepted(self, client: AsyncClient):
        resp = await client.post(
            "/api/v1/quotes",
            json={
                "site_profile": {"peak_sun_hours": 5.0},
                "usage_profile": {"electricity_rate": 0.12, "monthly_kwh": 1000},
            },
        )
        assert resp.status_code == 200
        assert resp.json()["usage"]["source"] == "direct"

    async def test_request_id_echoed(self, client: AsyncClient, quote_payload):
        resp = await client.post(
            "/api/v1/quotes", json=quote_payload, headers={"X-Request-ID": "abc123"}
        )
        assert resp.headers["X-Request-ID"] == "abc123"


class TestQuoteValidation:
    @pytest.mark.parametrize(
        "section, field, value",
        [
            ("usageProfile", "electricityRate", 0),
            ("usageProfile", "monthlyBill", -10),
            ("usageProfile", "offsetPercent", 200),
            ("usageProfile", "heatingType", "coal"),
            ("siteProfile", "tiltDegrees", 75),
            ("siteProfile", "peakSunHours", 0),
            ("siteProfile", "orientation", "UP"),
            ("siteProfile", "shadingLevel", "total"),
        ],
    )
    async def test_rejected(self, client: AsyncClient, quote_payload, section, field, value):
        payload = copy.deepcopy(quote_payload)
        payload[section][field] = value
        resp = await client.post("/api/v1/quotes", json=payload)
        assert resp.status_code == 422

    async def test_missing_usage_profile(self, client: AsyncClient, quote_payload):
        payload = copy.deepcopy(quote_payload)
        del payload["usageProfile"]
        resp = await client.post("/api/v1/quotes", json=payload)
        assert resp.status_code == 422


# ======================================================================
# POST /api/v1/quotes/report
# ======================================================================


class TestQuoteReport:
    async def test_pdf_download(self, client: AsyncClient, quote_payload):
        payload = copy.deepcopy(quote_payload)
        payload["siteProfile"]["address"] = "123 Main St, Austin TX"
        resp = await client.post("/api/v1/quotes/report", json=payload)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert "solar_quote_123_Main_St_Austin_TX.pdf" in resp.headers["content-disposition"]
        assert resp.content.startswith(b"%PDF")

    @pytest.mark.parametrize("address", ["12 Oak <b>Ln", "Apt </para> 3"])
    async def test_markup_in_address(self, client: AsyncClient, quote_payload, address):
        payload = copy.deepcopy(quote_payload)
        payload["siteProfile"]["address"] = address
        resp = await client.post("/api/v1/quotes/report", json=payload)
        assert resp.status_code == 200
        assert resp.content.startswith(b"%PDF")

    async def test_rate_limited(self, client: AsyncClient, quote_payload):
        from solargrind_api.core.rate_limit import report_limiter

        now = time.monotonic()
        report_limiter._requests["10.0.0.7"].extend([now] * report_limiter.max_requests)
        resp = await client.post(
            "/api/v1/quotes/report", json=quote_payload,
            headers={"X-Forwarded-For": "10.0.0.7"},
        )
        assert resp.status_code == 429
        assert 1 <= int(resp.headers["Retry-After"]) <= report_limiter.window_seconds

    async def test_rate_limit_is_per_client(self, client: AsyncClient, quote_payload):
        from solargrind_api.core.rate_limit import report_limiter

        now = time.monotonic()
        report_limiter._requests["10.0.0.7"].extend([now] * report_limiter.max_requests)
        resp = await client.post(
            "/api/v1/quotes/report", json=quote_payload,
            headers={"X-Forwarded-For": "10.0.0.8"},
        )
        assert resp.status_code == 200
