"""Quote report generation."""

from .pdf_report import build_quote_report

__all__ = ["build_quote_report"]
