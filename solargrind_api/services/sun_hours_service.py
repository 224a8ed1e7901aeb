"""Peak-sun-hours resolution with graceful fallback.

NREL solar resource data when an API key is configured, otherwise (or on
any NREL failure) a latitude-based estimate, otherwise the configured
default.
"""
import logging
from dataclasses import dataclass

import httpx

from solargrind.solar.sun_hours import estimate_sun_hours
from solargrind.weather.nrel import fetch_nrel_sun_hours
from solargrind_api.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SunHoursResult:
    sun_hours: float
    source: str
    latitude: float | None = None
    longitude: float | None = None


async def resolve_sun_hours(
    latitude: float | None,
    longitude: float | None,
    client: httpx.AsyncClient | None = None,
) -> SunHoursResult:
    if latitude is None or longitude is None:
        return SunHoursResult(settings.default_peak_sun_hours, "default", latitude, longitude)

    if not settings.nrel_api_key:
        return SunHoursResult(estimate_sun_hours(latitude), "estimation", latitude, longitude)

    try:
        hours = await fetch_nrel_sun_hours(
            latitude,
            longitude,
            settings.nrel_api_key,
            base_url=settings.nrel_base_url,
            client=client,
            timeout=settings.nrel_timeout_seconds,
        )
    except (httpx.HTTPError, ValueError, KeyError) as exc:
        logger.warning(
            "NREL lookup failed for (%.4f, %.4f), using latitude estimate: %s",
            latitude, longitude, exc,
        )
        return SunHoursResult(
            estimate_sun_hours(latitude), "estimation_fallback", latitude, longitude
        )

    return SunHoursResult(hours, "nrel_api", latitude, longitude)
