"""Irradiance data module (NREL solar resource client)."""

from .nrel import NREL_SOLAR_RESOURCE_URL, fetch_nrel_sun_hours, parse_solar_resource

__all__ = ["NREL_SOLAR_RESOURCE_URL", "fetch_nrel_sun_hours", "parse_solar_resource"]
