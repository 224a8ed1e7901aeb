"""Household electricity usage estimation.

Turns whatever the homeowner told us (a meter reading, a bill, or just the
size of the house) into a monthly and annual kWh figure for sizing.
"""

from __future__ import annotations

from ..assumptions import DEFAULT_ASSUMPTIONS, CalculatorAssumptions
from ..models import UsageEstimate, UsageProfile

MONTHS_PER_YEAR = 12


def usage_from_bill(monthly_bill: float, electricity_rate: float) -> float:
    """Monthly kWh implied by a bill at a flat retail rate."""
    return monthly_bill / electricity_rate


def heuristic_monthly_usage(
    usage: UsageProfile,
    assumptions: CalculatorAssumptions = DEFAULT_ASSUMPTIONS,
) -> float:
    """Estimate monthly kWh from household characteristics.

    ``(sqft * kwh_per_sqft + occupants * kwh_per_occupant) * heating``
    plus flat monthly increments for a pool and an EV.  Missing square
    footage or occupant count fall back to the named defaults in
    *assumptions*.
    """
    sqft = usage.square_footage
    if sqft is None:
        sqft = assumptions.default_square_footage
    occupants = usage.occupants
    if occupants is None:
        occupants = assumptions.default_occupants

    base = sqft * assumptions.kwh_per_sqft_month + occupants * assumptions.kwh_per_occupant_month
    base *= assumptions.heating_multipliers.get(usage.heating_type.value, 1.0)

    if usage.has_pool:
        base += assumptions.pool_kwh_month
    if usage.has_ev:
        base += assumptions.ev_kwh_month
    return base


def estimate_usage(
    usage: UsageProfile,
    assumptions: CalculatorAssumptions = DEFAULT_ASSUMPTIONS,
) -> UsageEstimate:
    """Resolve monthly and annual usage for a household.

    A direct kWh figure wins, then a bill divided by the rate, then the
    household heuristic.  A real bill already includes the pool and EV
    load, so the modifiers only apply to the heuristic.
    """
    if usage.monthly_kwh is not None:
        monthly, source = float(usage.monthly_kwh), "direct"
    elif usage.monthly_bill:
        monthly, source = usage_from_bill(usage.monthly_bill, usage.electricity_rate), "bill"
    else:
        monthly, source = heuristic_monthly_usage(usage, assumptions), "heuristic"

    return UsageEstimate(
        monthly_kwh=monthly,
        annual_kwh=monthly * MONTHS_PER_YEAR,
        source=source,
    )
