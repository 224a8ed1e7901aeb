"""Environmental impact module."""

from .impact import estimate_impact

__all__ = ["estimate_impact"]
