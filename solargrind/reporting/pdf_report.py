"""PDF quote report for a residential solar proposal.

A short customer-facing document: system summary, financial summary, a
monthly production chart, the year-by-year savings table and the
environmental impact of the system.
"""
from io import BytesIO
from datetime import datetime
from xml.sax.saxutils import escape

import numpy as np
from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
    PageBreak,
)
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle

from ..models import QuoteResult

# ══════════════════════════════════════════════════════════════════════
# Constants
# ══════════════════════════════════════════════════════════════════════

CHART_DPI = 150
PAGE_W, PAGE_H = LETTER
MARGIN = 18 * mm

MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

C_PRIMARY = "#d97706"
C_DARK = "#92400e"
C_GREEN = "#059669"
C_RED = "#dc2626"
C_GRAY = "#6b7280"
C_LIGHT_BG = "#fffbeb"
C_GRID = "#e5e7eb"

FOOTER_TEXT = "Solar Grind quote - estimates only, not a binding offer"


# ══════════════════════════════════════════════════════════════════════
# Matplotlib setup
# ══════════════════════════════════════════════════════════════════════

def _init_mpl():
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    plt.rcParams.update({
        "font.size": 8,
        "axes.titlesize": 10,
        "axes.labelsize": 8,
        "xtick.labelsize": 7,
        "ytick.labelsize": 7,
        "legend.fontsize": 7,
        "figure.dpi": CHART_DPI,
    })
    return plt


def _fig_to_buf(fig) -> BytesIO:
    buf = BytesIO()
    fig.savefig(buf, format="png", dpi=CHART_DPI, bbox_inches="tight")
    import matplotlib.pyplot as plt
    plt.close(fig)
    buf.seek(0)
    return buf


# ══════════════════════════════════════════════════════════════════════
# Charts
# ══════════════════════════════════════════════════════════════════════

def _make_production_chart(monthly_kwh: list[float], usage_kwh: float) -> BytesIO:
    """Monthly production bars against flat average household usage."""
    plt = _init_mpl()
    fig, ax = plt.subplots(figsize=(6, 2.8))
    x = np.arange(len(MONTH_NAMES))

    ax.bar(x, monthly_kwh, 0.6, color=C_PRIMARY, alpha=0.85, label="Solar production")
    ax.axhline(usage_kwh, color=C_DARK, linestyle="--", linewidth=1.0, label="Average usage")

    ax.set_xticks(x)
    ax.set_xticklabels(MONTH_NAMES)
    ax.set_ylabel("kWh")
    ax.set_title("Estimated Monthly Production", fontweight="bold")
    ax.legend(loc="upper right", fontsize=6)
    ax.grid(True, alpha=0.3, axis="y")
    fig.tight_layout()
    return _fig_to_buf(fig)


def _make_cumulative_chart(years: list[int], cumulative: list[float]) -> BytesIO:
    """Cumulative net savings line; the zero crossing is breakeven."""
    plt = _init_mpl()
    fig, ax = plt.subplots(figsize=(6, 2.6))

    arr = np.array(cumulative)
    ax.plot(years, arr, color=C_GREEN, linewidth=1.2)
    ax.fill_between(years, arr, 0, where=arr >= 0, color=C_GREEN, alpha=0.15)
    ax.fill_between(years, arr, 0, where=arr < 0, color=C_RED, alpha=0.15)
    ax.axhline(0, color=C_GRAY, linewidth=0.6)

    ax.set_xlabel("Year")
    ax.set_ylabel("Cumulative savings ($)")
    ax.set_title("Cumulative Net Savings", fontweight="bold")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return _fig_to_buf(fig)


# ══════════════════════════════════════════════════════════════════════
# Canvas callbacks
# ══════════════════════════════════════════════════════════════════════

def _on_first_page(canvas, doc):
    canvas.saveState()
    canvas.setFont("Helvetica", 7)
    canvas.setFillColor(colors.HexColor(C_GRAY))
    canvas.drawCentredString(PAGE_W / 2, 10 * mm, FOOTER_TEXT)
    canvas.restoreState()


def _on_later_pages(canvas, doc):
    """Pages 2+: header line + page number."""
    canvas.saveState()
    canvas.setStrokeColor(colors.HexColor(C_PRIMARY))
    canvas.setLineWidth(0.5)
    canvas.line(MARGIN, PAGE_H - 14 * mm, PAGE_W - MARGIN, PAGE_H - 14 * mm)
    canvas.setFont("Helvetica", 7)
    canvas.setFillColor(colors.HexColor(C_GRAY))
    canvas.drawString(MARGIN, PAGE_H - 12 * mm, "Solar Quote")
    canvas.drawRightString(PAGE_W - MARGIN, 8 * mm, f"Page {doc.page}")
    canvas.restoreState()


# ══════════════════════════════════════════════════════════════════════
# Styles & table helpers
# ══════════════════════════════════════════════════════════════════════

def _get_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        "ReportTitle", parent=styles["Title"],
        fontSize=24, spaceAfter=6, textColor=colors.HexColor(C_PRIMARY),
    ))
    styles.add(ParagraphStyle(
        "SectionHeader", parent=styles["Heading2"],
        fontSize=13, spaceBefore=12, spaceAfter=6,
        textColor=colors.HexColor(C_DARK),
    ))
    styles.add(ParagraphStyle(
        "BodyText2", parent=styles["Normal"],
        fontSize=9, leading=13, spaceAfter=4,
    ))
    styles.add(ParagraphStyle(
        "SmallGray", parent=styles["Normal"],
        fontSize=7, textColor=colors.HexColor(C_GRAY),
    ))
    return styles


def _styled_table(data: list[list], col_widths: list) -> Table:
    t = Table(data, colWidths=col_widths)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(C_DARK)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.4, colors.HexColor(C_GRID)),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1),
         [colors.white, colors.HexColor(C_LIGHT_BG)]),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]))
    return t


def _fmt(
    v: float | None, fmt_str: str = ",.0f",
    prefix: str = "", suffix: str = "",
) -> str:
    """Safe number formatting."""
    if v is None:
        return "N/A"
    try:
        return f"{prefix}{v:{fmt_str}}{suffix}"
    except (ValueError, TypeError):
        return "N/A"


def _key_value_table(rows: list[tuple[str, str]]) -> Table:
    return _styled_table([["Item", "Value"], *[list(r) for r in rows]], [90 * mm, 60 * mm])


# ══════════════════════════════════════════════════════════════════════
# Sections
# ══════════════════════════════════════════════════════════════════════

def _build_header(styles, address: str | None) -> list:
    elems: list = [Paragraph("Your Solar Quote", styles["ReportTitle"])]
    if address:
        elems.append(Paragraph(f"<b>Property:</b> {escape(address)}", styles["BodyText2"]))
    elems.append(Paragraph(
        f"<b>Prepared:</b> {datetime.now().strftime('%Y-%m-%d')}", styles["BodyText2"],
    ))
    elems.append(Spacer(1, 4 * mm))
    return elems


def _build_system_summary(styles, quote: QuoteResult) -> list:
    design, production, usage = quote.design, quote.production, quote.usage
    rows = [
        ("System size", _fmt(design.system_size_kw, ".2f", suffix=" kW")),
        ("Panels", f"{design.panel_count} x {_fmt(design.panel_wattage)} W"),
        ("Inverter", design.inverter_type.replace("_", " ").title()),
        ("Annual production", _fmt(production.annual_kwh, suffix=" kWh")),
        ("Performance ratio", _fmt(production.performance_ratio * 100, ".1f", suffix="%")),
        ("Household usage", _fmt(usage.annual_kwh, suffix=" kWh/yr")),
        ("Usage offset", _fmt(quote.financials.offset_percent, ".0f", suffix="%")),
    ]
    if design.battery_capacity_kwh:
        rows.append(("Battery storage", _fmt(design.battery_capacity_kwh, ".1f", suffix=" kWh")))

    monthly = list(production.monthly_kwh)
    return [
        Paragraph("System Summary", styles["SectionHeader"]),
        _key_value_table(rows),
        Spacer(1, 4 * mm),
        Image(_make_production_chart(monthly, usage.monthly_kwh), width=160 * mm, height=75 * mm),
    ]


def _build_financial_summary(styles, quote: QuoteResult) -> list:
    fin = quote.financials
    rows = [
        ("System cost", _fmt(fin.system_cost, prefix="$")),
        ("Federal tax credit", _fmt(fin.incentives.federal_credit, prefix="$")),
        ("State rebate", _fmt(fin.incentives.state_rebate, prefix="$")),
        ("Utility rebate", _fmt(fin.incentives.utility_rebate, prefix="$")),
        ("Net cost", _fmt(fin.net_cost, prefix="$")),
        ("First-year savings", _fmt(fin.annual_savings, prefix="$")),
        ("Monthly savings", _fmt(fin.monthly_savings, ",.2f", prefix="$")),
        ("Simple payback", _fmt(fin.payback_years, ".1f", suffix=" years")),
        ("Lifetime savings", _fmt(fin.lifetime_savings, prefix="$")),
        ("Net present value", _fmt(fin.npv, prefix="$")),
        ("Internal rate of return", _fmt(
            fin.irr * 100 if fin.irr is not None else None, ".1f", suffix="%")),
    ]
    elems: list = [
        Paragraph("Financial Summary", styles["SectionHeader"]),
        _key_value_table(rows),
    ]

    loan = fin.loan
    if loan is not None:
        elems.append(Spacer(1, 3 * mm))
        elems.append(Paragraph(
            f"Financed {_fmt(loan.principal, prefix='$')} at "
            f"{loan.apr * 100:.2f}% APR over {loan.term_months} months: "
            f"<b>{_fmt(loan.monthly_payment, ',.2f', prefix='$')}/month</b>, "
            f"{_fmt(loan.total_interest, prefix='$')} total interest.",
            styles["BodyText2"],
        ))
    return elems


def _build_projection(styles, quote: QuoteResult) -> list:
    yearly = quote.financials.yearly
    if not yearly:
        return []

    data = [["Year", "Bill without solar", "Bill with solar", "Savings", "Cumulative"]]
    for row in yearly:
        data.append([
            str(row.year),
            _fmt(row.bill_without_solar, prefix="$"),
            _fmt(row.bill_with_solar, prefix="$"),
            _fmt(row.annual_savings, prefix="$"),
            _fmt(row.cumulative_savings, prefix="$"),
        ])

    chart = _make_cumulative_chart(
        [r.year for r in yearly], [r.cumulative_savings for r in yearly],
    )
    elems: list = [
        PageBreak(),
        Paragraph("Savings Projection", styles["SectionHeader"]),
        Image(chart, width=160 * mm, height=70 * mm),
        Spacer(1, 4 * mm),
        _styled_table(data, [18 * mm, 38 * mm, 38 * mm, 32 * mm, 36 * mm]),
    ]
    breakeven = quote.financials.breakeven_year
    if breakeven is not None:
        elems.append(Spacer(1, 2 * mm))
        elems.append(Paragraph(
            f"The system pays for itself in year {breakeven}.", styles["BodyText2"],
        ))
    return elems


def _build_environment(styles, quote: QuoteResult) -> list:
    env = quote.environment
    rows = [
        ("CO2 avoided per year", _fmt(env.co2_tons_per_year, ".2f", suffix=" t")),
        ("Tree equivalent per year", _fmt(env.trees_equivalent_per_year, ".0f", suffix=" trees")),
        ("CO2 avoided over system life", _fmt(env.co2_tons_lifetime, ".1f", suffix=" t")),
    ]
    return [
        Paragraph("Environmental Impact", styles["SectionHeader"]),
        _key_value_table(rows),
        Spacer(1, 6 * mm),
        Paragraph(
            "Figures are estimates based on average irradiance, standard "
            "derating factors and current utility rates.",
            styles["SmallGray"],
        ),
    ]


def build_quote_report(quote: QuoteResult, address: str | None = None) -> bytes:
    """Render *quote* as a PDF document and return its bytes."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=LETTER,
        topMargin=18 * mm,
        bottomMargin=15 * mm,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        title="Solar Quote",
    )

    styles = _get_styles()
    elements: list = []
    elements.extend(_build_header(styles, address))
    elements.extend(_build_system_summary(styles, quote))
    elements.extend(_build_financial_summary(styles, quote))
    elements.extend(_build_projection(styles, quote))
    elements.extend(_build_environment(styles, quote))

    doc.build(elements, onFirstPage=_on_first_page, onLaterPages=_on_later_pages)
    return buffer.getvalue()
