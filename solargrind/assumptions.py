"""Policy and environmental assumptions used by the quote calculator.

Every number here is a market, policy or regional assumption rather than
an algorithmic invariant: installed cost per watt, the federal tax credit
rate, grid emissions intensity and so on all change over time and by
jurisdiction.  They are collected in one frozen dataclass so callers can
derive variants with :func:`dataclasses.replace` instead of patching
module globals.

Units
-----
* costs in USD, energy in kWh, power in W or kW as named
* rates (credit, escalation, losses) are fractions, not percentages
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

def _freeze_table(table: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only view of a lookup table, nested rows included."""
    return MappingProxyType({
        k: _freeze_table(v) if isinstance(v, Mapping) else v
        for k, v in table.items()
    })


SHADING_FACTORS: Mapping[str, float] = MappingProxyType({
    "none": 1.00,
    "minimal": 0.95,
    "moderate": 0.85,
    "heavy": 0.70,
})

# Upper bounds (exclusive) of each tilt bucket in degrees; "steep" is open.
TILT_BUCKETS: tuple[tuple[str, float], ...] = (
    ("flat", 10.0),
    ("low", 25.0),
    ("medium", 40.0),
    ("steep", float("inf")),
)

# Orientation x tilt-bucket production factor relative to an ideal
# south-facing, latitude-tilted array (northern hemisphere).  Flat roofs
# barely care which way they "face"; steep roofs care a lot.
ORIENTATION_TILT_FACTORS: Mapping[str, Mapping[str, float]] = _freeze_table({
    "S":  {"flat": 0.90, "low": 0.97, "medium": 1.00, "steep": 0.96},
    "SE": {"flat": 0.90, "low": 0.95, "medium": 0.95, "steep": 0.91},
    "SW": {"flat": 0.90, "low": 0.95, "medium": 0.95, "steep": 0.91},
    "E":  {"flat": 0.88, "low": 0.87, "medium": 0.85, "steep": 0.80},
    "W":  {"flat": 0.88, "low": 0.87, "medium": 0.85, "steep": 0.80},
    "NE": {"flat": 0.86, "low": 0.80, "medium": 0.75, "steep": 0.68},
    "NW": {"flat": 0.86, "low": 0.80, "medium": 0.75, "steep": 0.68},
    "N":  {"flat": 0.86, "low": 0.76, "medium": 0.65, "steep": 0.55},
})

# Jan..Dec production multipliers.  Normalised to sum to 12 before use.
SEASONAL_SHAPE: tuple[float, ...] = (
    0.7, 0.8, 1.0, 1.1, 1.2, 1.2, 1.2, 1.1, 1.0, 0.9, 0.8, 0.7,
)

HEATING_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "gas": 1.00,
    "electric": 1.25,
    "heat_pump": 1.10,
    "none": 1.00,
})


@dataclass(frozen=True)
class CalculatorAssumptions:
    """Named, overridable constants for one quote calculation."""

    # --- Equipment ---
    panel_wattage: float = 440.0            # W per module (Silfab SIL-440 class)
    inverter_type: str = "microinverter"
    battery_cost_per_kwh: float = 1222.0    # installed, ~$16.5k per 13.5 kWh unit

    # --- Performance ---
    system_loss_factor: float = 0.85        # inverter, wiring, soiling, mismatch
    shading_factors: Mapping[str, float] = field(default_factory=lambda: SHADING_FACTORS)
    orientation_tilt_factors: Mapping[str, Mapping[str, float]] = field(
        default_factory=lambda: ORIENTATION_TILT_FACTORS
    )
    seasonal_shape: tuple[float, ...] = SEASONAL_SHAPE

    # --- Household usage heuristic ---
    kwh_per_sqft_month: float = 0.35
    kwh_per_occupant_month: float = 75.0
    default_square_footage: float = 2000.0
    default_occupants: int = 3
    pool_kwh_month: float = 150.0
    ev_kwh_month: float = 200.0
    heating_multipliers: Mapping[str, float] = field(
        default_factory=lambda: HEATING_MULTIPLIERS
    )

    # --- Cost & incentives ---
    cost_per_watt: float = 3.55             # cash price, $/W DC
    federal_credit_rate: float = 0.30       # residential clean energy credit

    # --- Loan defaults ---
    loan_apr: float = 0.0799
    loan_term_months: int = 300

    # --- Projection ---
    utility_escalation_rate: float = 0.035
    om_cost_per_kw_year: float = 0.0        # solar O&M, $/kW-yr
    om_creep_rate: float = 0.01             # O&M cost growth
    degradation_rate: float = 0.0
    discount_rate: float = 0.06
    projection_years: int = 25

    # --- Environment ---
    co2_tons_per_kwh: float = 0.0004
    trees_per_co2_ton: float = 16.0

    def __post_init__(self):
        for name in ("shading_factors", "orientation_tilt_factors", "heating_multipliers"):
            table = getattr(self, name)
            if not isinstance(table, MappingProxyType):
                object.__setattr__(self, name, _freeze_table(table))

    def with_overrides(self, **overrides: Any) -> CalculatorAssumptions:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)


DEFAULT_ASSUMPTIONS = CalculatorAssumptions()
