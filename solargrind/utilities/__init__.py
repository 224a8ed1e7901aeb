"""Utility solar programme reference data and address-to-utility detection."""

from .detection import (
    AddressComponents,
    UtilityDetection,
    detect_utility_from_address,
    parse_address,
    suggest_utilities_for_region,
)
from .programs import (
    SOLAR_PROGRAMS,
    SolarProgram,
    best_programs_for_solar,
    calculate_monthly_solar_savings,
    get_policy_description,
    get_solar_program,
    get_utility_type,
    list_solar_programs,
    worst_programs_for_solar,
)

__all__ = [
    "SOLAR_PROGRAMS",
    "SolarProgram",
    "get_solar_program",
    "list_solar_programs",
    "get_utility_type",
    "get_policy_description",
    "best_programs_for_solar",
    "worst_programs_for_solar",
    "calculate_monthly_solar_savings",
    "AddressComponents",
    "UtilityDetection",
    "parse_address",
    "detect_utility_from_address",
    "suggest_utilities_for_region",
]
