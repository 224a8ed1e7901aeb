"""CO2 offset and tree-equivalent figures.

Grid-average, order-of-magnitude factors; swap them per region through
:class:`~solargrind.assumptions.CalculatorAssumptions`.
"""

from __future__ import annotations

from ..assumptions import DEFAULT_ASSUMPTIONS, CalculatorAssumptions
from ..models import EnvironmentalImpact, require_number


def estimate_impact(
    annual_production_kwh: float,
    assumptions: CalculatorAssumptions = DEFAULT_ASSUMPTIONS,
) -> EnvironmentalImpact:
    require_number("annual_production_kwh", annual_production_kwh)
    co2 = annual_production_kwh * assumptions.co2_tons_per_kwh
    return EnvironmentalImpact(
        co2_tons_per_year=co2,
        trees_equivalent_per_year=co2 * assumptions.trees_per_co2_ton,
        co2_tons_lifetime=co2 * assumptions.projection_years,
    )
