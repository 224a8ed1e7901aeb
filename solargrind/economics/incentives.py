"""System cost and incentive deductions."""

from __future__ import annotations

from ..models import IncentiveBreakdown, IncentiveOptions, require_number


def system_cost(
    system_size_kw: float,
    cost_per_watt: float,
    battery_capacity_kwh: float | None = None,
    battery_cost_per_kwh: float = 0.0,
) -> float:
    """Installed cash price: DC watts at the per-watt rate plus any battery."""
    require_number("system_size_kw", system_size_kw)
    require_number("cost_per_watt", cost_per_watt)
    cost = system_size_kw * 1000.0 * cost_per_watt
    if battery_capacity_kwh:
        cost += battery_capacity_kwh * battery_cost_per_kwh
    return cost


def compute_incentives(
    cash_price: float,
    options: IncentiveOptions,
    federal_credit_rate: float,
) -> IncentiveBreakdown:
    """Federal credit as a share of the cash price plus flat rebates."""
    federal = cash_price * federal_credit_rate if options.federal_credit_enabled else 0.0
    return IncentiveBreakdown(
        federal_credit=federal,
        state_rebate=float(options.state_rebate),
        utility_rebate=float(options.utility_rebate),
    )


def net_cost(cash_price: float, incentives: IncentiveBreakdown) -> float:
    """Cash price less incentives, never below zero."""
    return max(cash_price - incentives.total, 0.0)
