"""Peak-sun-hours estimates used when no irradiance data is available."""

from __future__ import annotations

DEFAULT_PEAK_SUN_HOURS = 4.5

_EQUATOR_HOURS = 6.0
_DEGREES_PER_HOUR_LOST = 20.0
_MIN_HOURS = 2.0
_MAX_HOURS = 6.0


def estimate_sun_hours(latitude: float) -> float:
    """Rough peak sun hours from latitude alone.

    Six hours at the equator, one hour less per 20 degrees towards either
    pole, clamped to 2-6 hours.
    """
    estimated = _EQUATOR_HOURS - abs(latitude) / _DEGREES_PER_HOUR_LOST
    return max(_MIN_HOURS, min(_MAX_HOURS, estimated))
