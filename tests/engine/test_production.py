"""Tests for production estimates and sun-hours fallbacks."""
import pytest

from solargrind.assumptions import SEASONAL_SHAPE
from solargrind.models import CalculationInputError
from solargrind.solar.production import (
    annual_production_kwh,
    estimate_production,
    monthly_breakdown,
    normalised_shape,
)
from solargrind.solar.sun_hours import DEFAULT_PEAK_SUN_HOURS, estimate_sun_hours


class TestAnnualProduction:
    def test_formula(self):
        assert annual_production_kwh(9.68, 5.2, 0.85) == pytest.approx(9.68 * 5.2 * 365 * 0.85)

    def test_zero_size(self):
        assert annual_production_kwh(0.0, 5.0, 0.85) == 0.0

    def test_performance_ratio_above_one_rejected(self):
        with pytest.raises(CalculationInputError):
            annual_production_kwh(5.0, 5.0, 1.1)


class TestMonthlyBreakdown:
    def test_default_shape_is_normalised(self):
        # Raw multipliers sum to 11.7, not 12.
        assert sum(SEASONAL_SHAPE) == pytest.approx(11.7)
        assert normalised_shape(SEASONAL_SHAPE).sum() == pytest.approx(12.0)

    def test_months_sum_to_annual(self):
        monthly = monthly_breakdown(15616.7, SEASONAL_SHAPE)
        assert len(monthly) == 12
        assert sum(monthly) == pytest.approx(15616.7)

    def test_summer_above_winter(self):
        monthly = monthly_breakdown(12000, SEASONAL_SHAPE)
        assert monthly[5] > monthly[0]
        assert monthly[0] == pytest.approx(monthly[11])

    def test_wrong_length_rejected(self):
        with pytest.raises(CalculationInputError):
            normalised_shape([1.0] * 11)

    def test_all_zero_rejected(self):
        with pytest.raises(CalculationInputError):
            normalised_shape([0.0] * 12)


class TestEstimateProduction:
    def test_capacity_factor(self):
        est = estimate_production(10.0, 5.0, 0.8, SEASONAL_SHAPE)
        assert est.annual_kwh == pytest.approx(14600.0)
        assert est.capacity_factor == pytest.approx(14600.0 / 87600.0)
        assert est.specific_yield_kwh_per_kw == pytest.approx(1460.0)


class TestSunHoursEstimate:
    def test_equator(self):
        assert estimate_sun_hours(0.0) == pytest.approx(6.0)

    def test_mid_latitude(self):
        assert estimate_sun_hours(30.0) == pytest.approx(4.5)

    def test_southern_hemisphere_symmetric(self):
        assert estimate_sun_hours(-30.0) == pytest.approx(estimate_sun_hours(30.0))

    def test_clamped_at_poles(self):
        assert estimate_sun_hours(89.0) == pytest.approx(2.0)

    def test_default(self):
        assert DEFAULT_PEAK_SUN_HOURS == 4.5
