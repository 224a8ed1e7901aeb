"""Site performance ratio from shading, roof geometry and system losses."""

from __future__ import annotations

from ..assumptions import DEFAULT_ASSUMPTIONS, TILT_BUCKETS, CalculatorAssumptions
from ..models import CalculationInputError, Orientation, ShadingLevel, SiteProfile


def tilt_bucket(tilt_degrees: float) -> str:
    """Map a roof pitch in degrees onto one of the lookup buckets."""
    if tilt_degrees < 0:
        raise CalculationInputError(f"tilt_degrees must be non-negative, got {tilt_degrees}")
    for name, upper in TILT_BUCKETS:
        if tilt_degrees < upper:
            return name
    return TILT_BUCKETS[-1][0]


def shading_factor(
    shading: ShadingLevel,
    assumptions: CalculatorAssumptions = DEFAULT_ASSUMPTIONS,
) -> float:
    return assumptions.shading_factors[ShadingLevel(shading).value]


def orientation_tilt_factor(
    orientation: Orientation,
    tilt_degrees: float,
    assumptions: CalculatorAssumptions = DEFAULT_ASSUMPTIONS,
) -> float:
    row = assumptions.orientation_tilt_factors[Orientation(orientation).value]
    return row[tilt_bucket(tilt_degrees)]


def performance_ratio(
    site: SiteProfile,
    assumptions: CalculatorAssumptions = DEFAULT_ASSUMPTIONS,
) -> float:
    """Fraction of nameplate yield realised at this site.

    PR = shading * orientation/tilt * system losses, clamped to (0, 1].
    """
    pr = (
        shading_factor(site.shading, assumptions)
        * orientation_tilt_factor(site.orientation, site.tilt_degrees, assumptions)
        * assumptions.system_loss_factor
    )
    if pr <= 0:
        raise CalculationInputError(f"performance ratio must be positive, got {pr}")
    return min(pr, 1.0)
