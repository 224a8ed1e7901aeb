"""Tests for the environmental impact estimate."""
import pytest

from solargrind.assumptions import DEFAULT_ASSUMPTIONS
from solargrind.environment.impact import estimate_impact
from solargrind.models import CalculationInputError


class TestEnvironmentalImpact:
    def test_reference_scenario(self):
        impact = estimate_impact(12000)
        assert impact.co2_tons_per_year == pytest.approx(4.8)
        assert impact.trees_equivalent_per_year == pytest.approx(76.8)

    def test_lifetime(self):
        impact = estimate_impact(12000)
        assert impact.co2_tons_lifetime == pytest.approx(4.8 * DEFAULT_ASSUMPTIONS.projection_years)

    def test_regional_factor_override(self):
        cleaner_grid = DEFAULT_ASSUMPTIONS.with_overrides(co2_tons_per_kwh=0.0002)
        assert estimate_impact(12000, cleaner_grid).co2_tons_per_year == pytest.approx(2.4)

    def test_zero_production(self):
        assert estimate_impact(0).co2_tons_per_year == 0.0

    def test_negative_rejected(self):
        with pytest.raises(CalculationInputError):
            estimate_impact(-1)
