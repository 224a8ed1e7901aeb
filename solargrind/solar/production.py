"""Annual and monthly energy production estimate.

The monthly split uses a static seasonal shape rather than an irradiance
time series; it is a presentation approximation and is only guaranteed
to reconstruct the annual total.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..models import CalculationInputError, ProductionEstimate, require_number
from .sizing import DAYS_PER_YEAR

HOURS_PER_YEAR = 8760
MONTHS_PER_YEAR = 12


def annual_production_kwh(
    system_size_kw: float,
    peak_sun_hours: float,
    performance_ratio: float,
) -> float:
    """``size * psh * 365 * PR``."""
    require_number("system_size_kw", system_size_kw)
    require_number("peak_sun_hours", peak_sun_hours, strict=True)
    require_number("performance_ratio", performance_ratio, strict=True)
    if performance_ratio > 1.0:
        raise CalculationInputError(
            f"performance_ratio must be in (0, 1], got {performance_ratio}"
        )
    return system_size_kw * peak_sun_hours * DAYS_PER_YEAR * performance_ratio


def normalised_shape(shape: Sequence[float]) -> np.ndarray:
    """Scale a 12-month shape so its entries sum to exactly 12."""
    arr = np.asarray(shape, dtype=np.float64)
    if arr.shape != (MONTHS_PER_YEAR,):
        raise CalculationInputError(f"seasonal shape needs 12 values, got {arr.size}")
    if np.any(arr < 0) or arr.sum() <= 0:
        raise CalculationInputError("seasonal shape must be non-negative with a positive sum")
    return arr * (MONTHS_PER_YEAR / arr.sum())


def monthly_breakdown(annual_kwh: float, shape: Sequence[float]) -> tuple[float, ...]:
    """Split *annual_kwh* across Jan..Dec following *shape*."""
    monthly = (annual_kwh / MONTHS_PER_YEAR) * normalised_shape(shape)
    return tuple(float(v) for v in monthly)


def estimate_production(
    system_size_kw: float,
    peak_sun_hours: float,
    performance_ratio: float,
    seasonal_shape: Sequence[float],
) -> ProductionEstimate:
    annual = annual_production_kwh(system_size_kw, peak_sun_hours, performance_ratio)
    if system_size_kw > 0:
        capacity_factor = annual / (system_size_kw * HOURS_PER_YEAR)
        specific_yield = annual / system_size_kw
    else:
        capacity_factor = specific_yield = 0.0

    return ProductionEstimate(
        annual_kwh=annual,
        monthly_kwh=monthly_breakdown(annual, seasonal_shape),
        performance_ratio=performance_ratio,
        capacity_factor=capacity_factor,
        specific_yield_kwh_per_kw=specific_yield,
    )
