"""Shared fixtures for calculator and API tests."""

from __future__ import annotations

import pytest

from solargrind.models import (
    FinancingMethod,
    FinancingTerms,
    IncentiveOptions,
    QuoteInputs,
    SiteProfile,
    UsageProfile,
)


# ======================================================================
# Calculator input fixtures
# ======================================================================

@pytest.fixture
def south_site() -> SiteProfile:
    """Unshaded south roof at 25 degrees, 5.2 peak sun hours (PR 0.85)."""
    return SiteProfile(orientation="S", tilt_degrees=25, shading="none", peak_sun_hours=5.2)


@pytest.fixture
def bill_usage() -> UsageProfile:
    """$150/month at $0.12/kWh -> 1,250 kWh/month."""
    return UsageProfile(electricity_rate=0.12, monthly_bill=150.0)


@pytest.fixture
def cash_inputs(south_site, bill_usage) -> QuoteInputs:
    return QuoteInputs(site=south_site, usage=bill_usage)


@pytest.fixture
def loan_inputs(south_site, bill_usage) -> QuoteInputs:
    return QuoteInputs(
        site=south_site,
        usage=bill_usage,
        financing=FinancingTerms(method=FinancingMethod.LOAN, apr=0.0799, term_months=300),
        incentives=IncentiveOptions(federal_credit_enabled=True),
    )


# ======================================================================
# API payload fixtures
# ======================================================================

@pytest.fixture
def quote_payload() -> dict:
    """camelCase quote request for the same household as ``cash_inputs``."""
    return {
        "siteProfile": {
            "orientation": "S",
            "tiltDegrees": 25,
            "shadingLevel": "none",
            "peakSunHours": 5.2,
        },
        "usageProfile": {
            "monthlyBill": 150,
            "electricityRate": 0.12,
            "hasPool": False,
            "hasEV": False,
            "heatingType": "gas",
        },
        "financing": {"method": "cash"},
        "incentives": {"federalCreditEnabled": True},
    }
