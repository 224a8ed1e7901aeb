"""
Solar PV module.

Performance-ratio lookups, closed-form system sizing, annual/monthly
production estimates and latitude-based sun-hours fallbacks.
"""

from .performance import (
    orientation_tilt_factor,
    performance_ratio,
    shading_factor,
    tilt_bucket,
)
from .production import annual_production_kwh, estimate_production, monthly_breakdown
from .sizing import panels_for_size, required_system_kw, size_system
from .sun_hours import DEFAULT_PEAK_SUN_HOURS, estimate_sun_hours

__all__ = [
    # performance
    "performance_ratio",
    "shading_factor",
    "orientation_tilt_factor",
    "tilt_bucket",
    # sizing
    "required_system_kw",
    "panels_for_size",
    "size_system",
    # production
    "annual_production_kwh",
    "monthly_breakdown",
    "estimate_production",
    # sun hours
    "DEFAULT_PEAK_SUN_HOURS",
    "estimate_sun_hours",
]
