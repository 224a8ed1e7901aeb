"""Residential solar quote calculator.

Sizes a rooftop PV system from household usage and site factors, then
projects its cost, incentives, loan payment, savings and CO2 offset.
"""

from .assumptions import DEFAULT_ASSUMPTIONS, CalculatorAssumptions
from .calculator import calculate_quote
from .models import (
    CalculationInputError,
    FinancingMethod,
    FinancingTerms,
    HeatingType,
    IncentiveOptions,
    Orientation,
    QuoteInputs,
    QuoteResult,
    ShadingLevel,
    SiteProfile,
    UsageProfile,
)

__version__ = "0.1.0"

__all__ = [
    "calculate_quote",
    "CalculatorAssumptions",
    "DEFAULT_ASSUMPTIONS",
    "CalculationInputError",
    "FinancingMethod",
    "FinancingTerms",
    "HeatingType",
    "IncentiveOptions",
    "Orientation",
    "QuoteInputs",
    "QuoteResult",
    "ShadingLevel",
    "SiteProfile",
    "UsageProfile",
]
