"""Quote calculator: usage -> sizing -> production -> financials -> impact.

A deterministic function of its inputs.  No I/O, no caching, no shared
state; peak sun hours must already be resolved by the caller.
"""

from __future__ import annotations

import logging

from .assumptions import DEFAULT_ASSUMPTIONS, CalculatorAssumptions
from .economics.projection import project_financials
from .environment.impact import estimate_impact
from .load.usage import estimate_usage
from .models import QuoteInputs, QuoteResult
from .solar.performance import performance_ratio
from .solar.production import estimate_production
from .solar.sizing import size_system

logger = logging.getLogger(__name__)


def calculate_quote(
    inputs: QuoteInputs,
    assumptions: CalculatorAssumptions = DEFAULT_ASSUMPTIONS,
) -> QuoteResult:
    """Run every calculator stage for one household.

    Per-request panel wattage, cost per watt and inverter type override
    the matching *assumptions*.
    """
    assumptions = assumptions.with_overrides(
        panel_wattage=inputs.panel_wattage,
        cost_per_watt=inputs.cost_per_watt,
        inverter_type=inputs.inverter_type,
    )
    site, usage = inputs.site, inputs.usage

    usage_estimate = estimate_usage(usage, assumptions)
    target_kwh = usage_estimate.annual_kwh * usage.offset_percent / 100.0

    pr = performance_ratio(site, assumptions)
    design = size_system(
        target_annual_kwh=target_kwh,
        peak_sun_hours=site.peak_sun_hours,
        derate=pr,
        panel_wattage=assumptions.panel_wattage,
        inverter_type=assumptions.inverter_type,
        battery_capacity_kwh=inputs.battery_capacity_kwh,
    )

    production = estimate_production(
        design.system_size_kw,
        site.peak_sun_hours,
        pr,
        assumptions.seasonal_shape,
    )

    financials = project_financials(
        design,
        production,
        usage,
        usage_estimate,
        inputs.financing,
        inputs.incentives,
        assumptions,
    )
    environment = estimate_impact(production.annual_kwh, assumptions)

    logger.debug(
        "Quote: %.0f kWh/yr usage (%s) -> %d x %.0f W = %.2f kW, PR %.3f, %.0f kWh/yr",
        usage_estimate.annual_kwh,
        usage_estimate.source,
        design.panel_count,
        design.panel_wattage,
        design.system_size_kw,
        pr,
        production.annual_kwh,
    )

    return QuoteResult(
        usage=usage_estimate,
        design=design,
        production=production,
        financials=financials,
        environment=environment,
    )
