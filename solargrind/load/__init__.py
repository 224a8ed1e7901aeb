"""Household usage estimation module."""

from .usage import estimate_usage, heuristic_monthly_usage, usage_from_bill

__all__ = ["estimate_usage", "heuristic_monthly_usage", "usage_from_bill"]
