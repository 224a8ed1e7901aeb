"""Tests for the PDF quote report."""

import pytest

from solargrind import calculate_quote
from solargrind.reporting.pdf_report import _fmt, build_quote_report


class TestFormatting:
    def test_none_is_na(self):
        assert _fmt(None) == "N/A"

    def test_prefix_suffix(self):
        assert _fmt(1234.5, ",.2f", prefix="$") == "$1,234.50"
        assert _fmt(12.345, ".1f", suffix=" years") == "12.3 years"


class TestBuildQuoteReport:
    def test_cash_quote_renders(self, cash_inputs):
        pdf = build_quote_report(calculate_quote(cash_inputs), address="123 Main St, Austin TX")
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 5000

    def test_loan_quote_renders(self, loan_inputs):
        pdf = build_quote_report(calculate_quote(loan_inputs))
        assert pdf.startswith(b"%PDF")

    @pytest.mark.parametrize("address", ["12 Oak <b>Ln", "Apt </para> 3", "Smith & Sons Rd"])
    def test_markup_in_address(self, cash_inputs, address):
        pdf = build_quote_report(calculate_quote(cash_inputs), address=address)
        assert pdf.startswith(b"%PDF")
