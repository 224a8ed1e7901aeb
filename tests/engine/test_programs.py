"""Tests for the utility solar programme table."""
import pytest

from solargrind.models import CalculationInputError
from solargrind.utilities.programs import (
    SOLAR_PROGRAMS,
    best_programs_for_solar,
    calculate_monthly_solar_savings,
    get_policy_description,
    get_solar_program,
    get_utility_type,
    list_solar_programs,
    worst_programs_for_solar,
)


class TestLookup:
    def test_known_utility(self):
        program = get_solar_program("Austin Energy")
        assert program is not None
        assert program.type == "municipal"
        assert program.net_metering_policy == "full"
        assert program.buyback_rate == pytest.approx(0.097)

    def test_unknown_utility(self):
        assert get_solar_program("Nowhere Power & Light") is None

    def test_list_is_sorted(self):
        names = [p.utility_name for p in list_solar_programs()]
        assert names == sorted(names)
        assert len(names) == len(SOLAR_PROGRAMS)

    def test_table_integrity(self):
        for name, program in SOLAR_PROGRAMS.items():
            assert program.utility_name == name
            assert 0 <= program.buyback_percentage <= 100
            assert program.retail_rate > 0
            assert program.buyback_rate == "varies" or program.buyback_rate >= 0

    def test_utility_type_labels(self):
        assert get_utility_type("Oncor Electric Delivery") == "Deregulated TDU"
        assert get_utility_type("Bluebonnet Electric Cooperative") == "Electric Cooperative"
        assert get_utility_type("El Paso Electric") == "Investor-Owned Utility"
        assert get_utility_type("Nowhere") == "unknown"

    @pytest.mark.parametrize(
        "policy, text",
        [
            ("full", "Full Net Metering (1:1 credit)"),
            ("avoided_cost", "Avoided Cost Buyback"),
            ("none", "No Solar Buyback"),
            ("rep_dependent", "REP Dependent (Deregulated)"),
            ("mystery", "Unknown Policy"),
        ],
    )
    def test_policy_description(self, policy, text):
        assert get_policy_description(policy) == text


class TestRanking:
    def test_best_puts_full_net_metering_first(self):
        best = best_programs_for_solar(5)
        assert len(best) == 5
        assert all(p.net_metering_policy == "full" for p in best)

    def test_best_ordering_by_policy(self):
        scores = {"full": 3, "avoided_cost": 2, "rep_dependent": 1, "none": 0}
        ranked = [scores[p.net_metering_policy] for p in best_programs_for_solar(100)]
        assert ranked == sorted(ranked, reverse=True)

    def test_worst_led_by_no_buyback_and_high_fees(self):
        worst = worst_programs_for_solar(4)
        # J-A-C adds a DG fee to no buyback; the 100-point ties keep table order
        assert [p.utility_name for p in worst] == [
            "J-A-C Electric Cooperative",
            "Bailey County Electric Cooperative",
            "Lighthouse Electric Cooperative",
            "Southwest Rural Electric Association",
        ]

    def test_full_table_loaded(self):
        assert len(SOLAR_PROGRAMS) == 66
        counts = {t: sum(p.type == t for p in SOLAR_PROGRAMS.values())
                  for t in ("cooperative", "deregulated_tdu", "municipal", "iou")}
        assert counts == {"cooperative": 57, "deregulated_tdu": 4, "municipal": 3, "iou": 2}

    def test_limit(self):
        assert len(worst_programs_for_solar(3)) == 3


class TestMonthlySavings:
    def test_avoided_cost_export(self):
        savings = calculate_monthly_solar_savings(1000, 1200, 0.0793, 0.0343, connection_fee=20)
        assert savings["export_credits"] == pytest.approx(6.86)
        assert savings["gross_savings"] == pytest.approx(86.16)
        assert savings["net_savings"] == pytest.approx(66.16)
        assert savings["fees"] == pytest.approx(20)

    def test_varies_uses_retail(self):
        savings = calculate_monthly_solar_savings(1000, 1200, 0.12, "varies", connection_fee=15)
        assert savings["gross_savings"] == pytest.approx(144.0)
        assert savings["net_savings"] == pytest.approx(129.0)

    def test_no_export_when_under_usage(self):
        savings = calculate_monthly_solar_savings(1000, 800, 0.10, 0.05)
        assert savings["export_credits"] == 0.0
        assert savings["gross_savings"] == pytest.approx(80.0)

    def test_fees_can_exceed_savings(self):
        savings = calculate_monthly_solar_savings(100, 50, 0.14, 0.07, dg_fee=33.5, connection_fee=35)
        assert savings["net_savings"] < 0

    def test_bad_buyback_string_rejected(self):
        with pytest.raises(CalculationInputError):
            calculate_monthly_solar_savings(1000, 1200, 0.12, "sometimes")
