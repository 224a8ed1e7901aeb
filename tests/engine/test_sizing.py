"""Tests for performance ratio and system sizing."""
import math

import pytest

from solargrind.models import CalculationInputError, SiteProfile
from solargrind.solar.performance import (
    orientation_tilt_factor,
    performance_ratio,
    shading_factor,
    tilt_bucket,
)
from solargrind.solar.sizing import panels_for_size, required_system_kw, size_system


class TestTiltBucket:
    @pytest.mark.parametrize(
        "tilt, bucket",
        [(0, "flat"), (9.9, "flat"), (10, "low"), (24, "low"), (25, "medium"),
         (39, "medium"), (40, "steep"), (60, "steep")],
    )
    def test_bucket_edges(self, tilt, bucket):
        assert tilt_bucket(tilt) == bucket

    def test_negative_rejected(self):
        with pytest.raises(CalculationInputError):
            tilt_bucket(-1)


class TestPerformanceRatio:
    def test_ideal_site(self, south_site):
        assert performance_ratio(south_site) == pytest.approx(0.85)

    def test_heavy_shading_north_steep(self):
        site = SiteProfile(orientation="N", tilt_degrees=45, shading="heavy")
        assert performance_ratio(site) == pytest.approx(0.70 * 0.55 * 0.85)

    def test_components(self):
        assert shading_factor("moderate") == pytest.approx(0.85)
        assert orientation_tilt_factor("E", 15) == pytest.approx(0.87)

    def test_shading_monotonic(self):
        prs = [
            performance_ratio(SiteProfile(shading=level))
            for level in ("none", "minimal", "moderate", "heavy")
        ]
        assert prs == sorted(prs, reverse=True)

    def test_always_in_unit_interval(self):
        for orientation in ("N", "NE", "E", "SE", "S", "SW", "W", "NW"):
            for tilt in (0, 15, 30, 50):
                pr = performance_ratio(SiteProfile(orientation=orientation, tilt_degrees=tilt))
                assert 0 < pr <= 1


class TestRequiredSize:
    def test_scenario_size(self):
        kw = required_system_kw(15000, 5.2, 0.85)
        assert kw == pytest.approx(15000 / (5.2 * 365 * 0.85))
        assert kw == pytest.approx(9.30, abs=0.01)

    def test_zero_target_gives_zero(self):
        assert required_system_kw(0, 5.0, 0.85) == 0.0

    def test_zero_sun_hours_rejected(self):
        with pytest.raises(CalculationInputError):
            required_system_kw(10000, 0, 0.85)

    def test_derate_above_one_rejected(self):
        with pytest.raises(CalculationInputError):
            required_system_kw(10000, 5.0, 1.2)


class TestPanelCount:
    def test_rounds_up(self):
        assert panels_for_size(9.30, 440) == 22

    def test_exact_multiple_not_bumped(self):
        # 0.44 * 3 = 1.32 in floats is 1.3200000000000003
        assert panels_for_size(0.44 * 3, 440) == 3

    def test_minimum_one_panel(self):
        assert panels_for_size(0.0, 440) == 1

    def test_size_system_consistency(self):
        design = size_system(15000, 5.2, 0.85, panel_wattage=440)
        assert design.panel_count == 22
        assert design.system_size_kw == pytest.approx(9.68)
        assert design.system_size_kw == pytest.approx(design.panel_count * 440 / 1000)
        assert design.inverter_type == "microinverter"

    def test_sized_system_meets_target(self):
        raw = required_system_kw(12345, 4.7, 0.8)
        design = size_system(12345, 4.7, 0.8, panel_wattage=400)
        assert design.system_size_kw >= raw
        assert design.system_size_kw - raw < 0.4 + 1e-9

    def test_count_monotonic_in_target(self):
        counts = [
            size_system(target, 5.0, 0.85, panel_wattage=440).panel_count
            for target in range(2000, 30001, 1000)
        ]
        assert counts == sorted(counts)
        assert all(math.isfinite(c) for c in counts)
