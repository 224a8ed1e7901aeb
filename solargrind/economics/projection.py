"""Savings, payback and long-horizon bill projection.

Annual savings assume every produced kWh offsets a retail kWh; export
buyback at a different rate is handled separately by
:mod:`solargrind.utilities.programs`.

Year-by-year projection (year i = 1..N)::

    bill_without_i = baseline * (1 + escalation)^(i-1)
    offset_i       = min(savings * (1 - degradation)^(i-1), baseline)
    om_i           = om_cost * (1 + om_creep)^(i-1)
    bill_with_i    = (baseline - offset_i) * (1 + escalation)^(i-1) + om_i
    cumulative_i   = sum(bill_without - bill_with) - net_cost

The grid energy still bought after solar is priced at the same escalated
rate as the baseline, so a system that produces nothing saves nothing.
"""

from __future__ import annotations

from scipy.optimize import brentq

from ..assumptions import CalculatorAssumptions
from ..models import (
    FinancialProjection,
    FinancingMethod,
    FinancingTerms,
    IncentiveOptions,
    ProductionEstimate,
    SystemDesign,
    UsageEstimate,
    UsageProfile,
    YearProjection,
)
from .financing import summarize_loan
from .incentives import compute_incentives, net_cost, system_cost

MONTHS_PER_YEAR = 12


# ======================================================================
# Scalar metrics
# ======================================================================

def payback_period(net_cost: float, annual_savings: float) -> float | None:
    """Simple payback in years, or ``None`` when savings never accrue."""
    if annual_savings <= 0:
        return None
    return net_cost / annual_savings


def net_present_value(cash_flows: list[float], discount_rate: float) -> float:
    """NPV of cash flows indexed from year 0."""
    return sum(cf / (1.0 + discount_rate) ** t for t, cf in enumerate(cash_flows))


def internal_rate_of_return(cash_flows: list[float]) -> float | None:
    """IRR using Brent's method, or ``None`` if no root is bracketed."""
    def npv_at_rate(r: float) -> float:
        return net_present_value(cash_flows, r)

    try:
        return float(brentq(npv_at_rate, -0.50, 5.0, xtol=1e-8, maxiter=500))
    except (ValueError, RuntimeError):
        return None


def offset_percent(annual_production_kwh: float, annual_usage_kwh: float) -> float:
    """Share of usage covered by production, capped at 100."""
    if annual_usage_kwh <= 0:
        return 100.0
    return min(annual_production_kwh / annual_usage_kwh * 100.0, 100.0)


# ======================================================================
# Year-by-year projection
# ======================================================================

def yearly_projection(
    baseline_annual_bill: float,
    annual_savings: float,
    net_cost: float,
    years: int,
    escalation_rate: float,
    degradation_rate: float = 0.0,
    annual_om_cost: float = 0.0,
    om_creep_rate: float = 0.0,
) -> list[YearProjection]:
    rows: list[YearProjection] = []
    cumulative = -net_cost

    for yr in range(1, years + 1):
        escalator = (1.0 + escalation_rate) ** (yr - 1)
        bill_without = baseline_annual_bill * escalator
        offset = min(
            annual_savings * (1.0 - degradation_rate) ** (yr - 1),
            baseline_annual_bill,
        )
        bill_with = (baseline_annual_bill - offset) * escalator
        bill_with += annual_om_cost * (1.0 + om_creep_rate) ** (yr - 1)
        savings = bill_without - bill_with
        cumulative += savings

        rows.append(YearProjection(
            year=yr,
            bill_without_solar=bill_without,
            bill_with_solar=bill_with,
            annual_savings=savings,
            cumulative_savings=cumulative,
        ))

    return rows


def breakeven_year(rows: list[YearProjection]) -> int | None:
    for row in rows:
        if row.cumulative_savings >= 0:
            return row.year
    return None


# ======================================================================
# Main entry point
# ======================================================================

def project_financials(
    design: SystemDesign,
    production: ProductionEstimate,
    usage: UsageProfile,
    usage_estimate: UsageEstimate,
    financing: FinancingTerms,
    incentive_options: IncentiveOptions,
    assumptions: CalculatorAssumptions,
) -> FinancialProjection:
    """Cost, incentives, loan, savings and the multi-year projection.

    Costs are priced with ``assumptions.cost_per_watt``; callers apply any
    per-request override before calling.
    """
    cash_price = system_cost(
        design.system_size_kw,
        assumptions.cost_per_watt,
        design.battery_capacity_kwh,
        assumptions.battery_cost_per_kwh,
    )
    incentives = compute_incentives(cash_price, incentive_options, assumptions.federal_credit_rate)
    net = net_cost(cash_price, incentives)

    loan = None
    if financing.method is FinancingMethod.LOAN:
        apr = financing.apr if financing.apr is not None else assumptions.loan_apr
        term = financing.term_months or assumptions.loan_term_months
        loan = summarize_loan(net, apr, term, financing.down_payment_percent)

    annual_savings = production.annual_kwh * usage.electricity_rate

    if usage.monthly_bill:
        baseline_annual_bill = usage.monthly_bill * MONTHS_PER_YEAR
    else:
        baseline_annual_bill = usage_estimate.monthly_kwh * usage.electricity_rate * MONTHS_PER_YEAR

    rows = yearly_projection(
        baseline_annual_bill=baseline_annual_bill,
        annual_savings=annual_savings,
        net_cost=net,
        years=assumptions.projection_years,
        escalation_rate=assumptions.utility_escalation_rate,
        degradation_rate=assumptions.degradation_rate,
        annual_om_cost=assumptions.om_cost_per_kw_year * design.system_size_kw,
        om_creep_rate=assumptions.om_creep_rate,
    )

    cash_flows = [-net] + [row.annual_savings for row in rows]
    total_savings = sum(row.annual_savings for row in rows)
    roi = (total_savings - net) / net * 100.0 if net > 0 else None

    return FinancialProjection(
        system_cost=cash_price,
        incentives=incentives,
        net_cost=net,
        annual_savings=annual_savings,
        monthly_savings=annual_savings / MONTHS_PER_YEAR,
        payback_years=payback_period(net, annual_savings),
        yearly=tuple(rows),
        breakeven_year=breakeven_year(rows),
        lifetime_savings=rows[-1].cumulative_savings if rows else -net,
        npv=net_present_value(cash_flows, assumptions.discount_rate),
        irr=internal_rate_of_return(cash_flows) if net > 0 else None,
        roi_percent=roi,
        offset_percent=offset_percent(production.annual_kwh, usage_estimate.annual_kwh),
        loan=loan,
    )
