"""NREL solar resource API client.

The ``solar/solar_resource/v1`` endpoint returns long-term average global
horizontal irradiance in kWh/m²/day.  One kWh/m²/day equals one hour at the
1 kW/m² standard test irradiance, so the annual ``avg_ghi`` is used directly
as peak sun hours.
"""

from __future__ import annotations

import httpx

NREL_SOLAR_RESOURCE_URL = "https://developer.nrel.gov/api/solar/solar_resource/v1.json"


def parse_solar_resource(data: dict) -> float:
    """Extract the annual average GHI from a solar_resource response body.

    Raises ``ValueError`` when the response carries API errors or no
    usable annual value (e.g. a point offshore).
    """
    errors = data.get("errors") or []
    if errors:
        raise ValueError(f"NREL API error: {'; '.join(str(e) for e in errors)}")

    avg_ghi = (data.get("outputs") or {}).get("avg_ghi")
    annual = avg_ghi.get("annual") if isinstance(avg_ghi, dict) else None
    if annual is None or isinstance(annual, str):
        raise ValueError("NREL response has no annual avg_ghi value")

    value = float(annual)
    if value <= 0:
        raise ValueError(f"NREL annual avg_ghi must be positive, got {value}")
    return value


async def fetch_nrel_sun_hours(
    lat: float,
    lon: float,
    api_key: str,
    base_url: str = NREL_SOLAR_RESOURCE_URL,
    client: httpx.AsyncClient | None = None,
    timeout: float = 10.0,
) -> float:
    """Fetch annual peak sun hours for a coordinate from NREL.

    A caller-supplied *client* is used as-is (and left open); otherwise a
    short-lived client is created for the single request.
    """
    params = {"api_key": api_key, "lat": lat, "lon": lon}

    if client is None:
        async with httpx.AsyncClient(timeout=timeout) as owned:
            response = await owned.get(base_url, params=params)
    else:
        response = await client.get(base_url, params=params)
    response.raise_for_status()

    return parse_solar_resource(response.json())
