"""Closed-form PV system sizing.

Size is driven purely by energy: how many kW of modules, at this site's
sun hours and performance ratio, produce the target annual kWh.  Roof
area packing is not considered.
"""

from __future__ import annotations

import math

from ..models import CalculationInputError, SystemDesign, require_number

DAYS_PER_YEAR = 365

# Quotients within this many decimals of an integer are treated as that
# integer before taking the ceiling.
_PANEL_QUOTIENT_DECIMALS = 9


def required_system_kw(
    target_annual_kwh: float,
    peak_sun_hours: float,
    derate: float,
) -> float:
    """Unrounded DC size (kW) that yields *target_annual_kwh*."""
    require_number("target_annual_kwh", target_annual_kwh)
    require_number("peak_sun_hours", peak_sun_hours, strict=True)
    require_number("derate", derate, strict=True)
    if derate > 1.0:
        raise CalculationInputError(f"derate must be at most 1, got {derate}")
    return target_annual_kwh / (peak_sun_hours * DAYS_PER_YEAR * derate)


def panels_for_size(system_kw: float, panel_wattage: float) -> int:
    """Whole panels needed to reach *system_kw*; never fewer than one."""
    require_number("panel_wattage", panel_wattage, strict=True)
    quotient = round(system_kw * 1000.0 / panel_wattage, _PANEL_QUOTIENT_DECIMALS)
    return max(1, math.ceil(quotient))


def size_system(
    target_annual_kwh: float,
    peak_sun_hours: float,
    derate: float,
    panel_wattage: float,
    inverter_type: str = "microinverter",
    battery_capacity_kwh: float | None = None,
) -> SystemDesign:
    """Size a system for *target_annual_kwh* and snap it to whole panels.

    The returned ``system_size_kw`` is recomputed from the panel count so
    it is always an exact multiple of one panel's rating.
    """
    raw_kw = required_system_kw(target_annual_kwh, peak_sun_hours, derate)
    count = panels_for_size(raw_kw, panel_wattage)
    return SystemDesign(
        panel_wattage=panel_wattage,
        panel_count=count,
        system_size_kw=count * panel_wattage / 1000.0,
        inverter_type=inverter_type,
        battery_capacity_kwh=battery_capacity_kwh,
    )
