"""Texas utility solar programmes and buyback savings.

A static reference table of how each utility credits rooftop solar: the
net metering policy, what exported energy is bought back at, and any
distributed-generation (DG) or connection fees.  It is informational and
independent from the sizing calculator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..models import CalculationInputError, require_number

BuybackRate = Union[float, str]

VARIES = "varies"


@dataclass(frozen=True)
class SolarProgram:
    utility_name: str
    type: str
    net_metering_policy: str
    buyback_rate: BuybackRate
    buyback_percentage: float
    retail_rate: float
    dg_fee: float
    connection_fee: float
    demand_charges: bool
    solar_rebates: bool
    notes: str
    max_system_size: float | None = None     # kW
    interconnection_fee: float | None = None  # one-time, USD
    program_status: str = "active"
    website: str | None = None
    last_updated: str = "2024-01-15"


# ======================================================================
# Programme table
# ======================================================================

_PROGRAMS: tuple[SolarProgram, ...] = (
    # Electric cooperatives
    SolarProgram(
        "Bailey County Electric Cooperative", "cooperative", "none",
        0.0, 0, 0.08, 0, 25, False, False,
        "Allows interconnection but does not credit surplus to grid. "
        "Excess energy is donated to the cooperative.",
        max_system_size=25,
    ),
    SolarProgram(
        "Bandera Electric Cooperative", "cooperative", "avoided_cost",
        0.0343, 43, 0.0793, 0, 20, False, False,
        "Avoided-cost buyback at 43% of retail rate. Credits applied "
        "monthly.",
        max_system_size=25,
    ),
    SolarProgram(
        "Bartlett Electric Cooperative", "cooperative", "full",
        0.118, 100, 0.118, 0, 22, False, False,
        "Full net metering with 1:1 credit for surplus generation. "
        "Monthly rollover of credits.",
        max_system_size=25,
    ),
    SolarProgram(
        "Big Country Electric Cooperative", "cooperative", "avoided_cost",
        0.0567, 49, 0.1147, 0, 28, False, False,
        "Avoided-cost policy at 49% of retail rate. Excess generation "
        "credited at wholesale rates.",
        max_system_size=25,
    ),
    SolarProgram(
        "Bluebonnet Electric Cooperative", "cooperative", "avoided_cost",
        0.0616, 64, 0.096, 0, 25, False, False,
        "Avoided-cost compensation at 64% of retail rate. Good buyback "
        "rate among cooperatives.",
        max_system_size=25,
    ),
    SolarProgram(
        "Bowie-Cass Electric Cooperative", "cooperative", "full",
        0.1448, 100, 0.1448, 15, 20, False, False,
        "Full net metering with 1:1 credit but charges $15/month DG fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Central Texas Electric Cooperative", "cooperative", "full",
        0.112, 100, 0.112, 15, 25, False, False,
        "Net metering with full credit but charges $15/month DG fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Cherokee County Electric Cooperative", "cooperative", "full",
        0.1293, 100, 0.1293, 15, 22, False, False,
        "Net metering with 1:1 credit plus $15/month fee for solar "
        "customers.",
        max_system_size=25,
    ),
    SolarProgram(
        "Coleman County Electric Cooperative", "cooperative", "full",
        0.084, 100, 0.084, 0, 24, False, False,
        "Full retail credit for exports with no additional fees. One of "
        "the better cooperative policies.",
        max_system_size=25,
    ),
    SolarProgram(
        "Comanche County Electric Cooperative", "cooperative", "avoided_cost",
        0.053, 39, 0.135, 0, 26, False, False,
        "Avoided-cost credit at 39% of retail rate. Lower buyback rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Concho Valley Electric Cooperative", "cooperative", "avoided_cost",
        0.06, 50, 0.12, 15.25, 25, False, False,
        "Avoided-cost buyback with $15.25/month solar charge. Additional "
        "fee makes economics less favorable.",
        max_system_size=25,
    ),
    SolarProgram(
        "Denton County Electric Cooperative (CoServ)", "cooperative", "avoided_cost",
        0.0663, 58, 0.1151, 25, 30, False, True,
        "Avoided-cost buyback with $25/month solar metering fee. Offers "
        "solar rebates to offset costs.",
        max_system_size=25,
        website="https://www.coserv.com/solar",
    ),
    SolarProgram(
        "Deep East Texas Electric Cooperative", "cooperative", "avoided_cost",
        0.0439, 39, 0.1125, 10, 22, False, False,
        "Avoided-cost policy with $10/month DER fee. Lower compensation "
        "rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Fannin County Electric Cooperative", "cooperative", "avoided_cost",
        0.0719, 55, 0.131, 0, 25, False, False,
        "Avoided-cost buyback at 55% of retail rate with no additional "
        "fees.",
        max_system_size=25,
    ),
    SolarProgram(
        "Farmers Electric Cooperative (Texas)", "cooperative", "avoided_cost",
        0.06, 56, 0.107, 5, 24, False, False,
        "No net metering for new solar installations. Explicitly states "
        "avoided-cost only.",
        max_system_size=25,
    ),
    SolarProgram(
        "Fayette Electric Cooperative", "cooperative", "avoided_cost",
        0.0428, 44, 0.097, 6, 23, False, False,
        "Avoided-cost policy with DG fee calculated as $0.75 per kW of "
        "solar capacity.",
        max_system_size=25,
    ),
    SolarProgram(
        "Fort Belknap Electric Cooperative", "cooperative", "avoided_cost",
        0.07, 50, 0.14, 33.5, 35, False, False,
        "Avoided-cost buyback with very high $33.50/month solar fee. "
        "Economics are poor due to high fees.",
        max_system_size=25,
    ),
    SolarProgram(
        "Grayson-Collin Electric Cooperative", "cooperative", "full",
        0.127, 100, 0.127, 5, 28, False, False,
        "Net metering with modest $5/month DG fee. One of the better "
        "cooperative policies.",
        max_system_size=25,
    ),
    SolarProgram(
        "Greenbelt Electric Cooperative", "cooperative", "avoided_cost",
        0.047, 33, 0.14, 0, 30, False, False,
        "Avoided-cost policy at only 33% of retail rate. Lower "
        "compensation.",
        max_system_size=25,
    ),
    SolarProgram(
        "Guadalupe Valley Electric Cooperative (GVEC)", "cooperative", "avoided_cost",
        0.085, 79, 0.1076, 0, 25, False, False,
        "Avoided-cost buyback at 79% of retail rate. Credits close to "
        "retail but not full 1:1.",
        max_system_size=25,
    ),
    SolarProgram(
        "Hamilton County Electric Cooperative", "cooperative", "avoided_cost",
        0.0354, 27, 0.1307, 0, 26, False, False,
        "Low avoided-cost rate at only 27% of retail. Poor economics for "
        "solar.",
        max_system_size=25,
    ),
    SolarProgram(
        "Heart of Texas Electric Cooperative", "cooperative", "avoided_cost",
        0.0481, 36, 0.1336, 0, 28, False, False,
        "Ended net metering for new installations. Confirms no net "
        "metering for new solar.",
        max_system_size=25,
    ),
    SolarProgram(
        "HILCO Electric Cooperative", "cooperative", "full",
        0.1337, 100, 0.1337, 0, 25, False, False,
        "Full retail credit for excess with no additional charges. "
        "Excellent cooperative policy.",
        max_system_size=25,
    ),
    SolarProgram(
        "Houston County Electric Cooperative", "cooperative", "avoided_cost",
        0.059, 39, 0.151, 15, 24, False, False,
        "Avoided-cost policy with $15/month DG charge. Additional fee "
        "reduces value.",
        max_system_size=25,
    ),
    SolarProgram(
        "J-A-C Electric Cooperative", "cooperative", "none",
        0.0, 0, 0.125, 11.5, 22, False, False,
        "No net metering policy. Surplus generation is not compensated "
        "and charges fee for solar.",
        max_system_size=25,
    ),
    SolarProgram(
        "Jasper-Newton Electric Cooperative", "cooperative", "full",
        0.125, 100, 0.125, 15, 23, False, False,
        "Net metering with 1:1 credit and $15/month DG fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Karnes Electric Cooperative", "cooperative", "avoided_cost",
        0.015, 14, 0.1051, 0, 24, False, False,
        "Very low avoided-cost rate at only 14% of retail. Poor solar "
        "economics.",
        max_system_size=25,
    ),
    SolarProgram(
        "Lamar County Electric Cooperative", "cooperative", "avoided_cost",
        0.06, 48, 0.125, 12.5, 26, False, False,
        "Avoided-cost policy with $12.50/month DG fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Lamb County Electric Cooperative", "cooperative", "avoided_cost",
        0.04, 50, 0.08, 0, 28, False, False,
        "Avoided-cost compensation at 50% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Lighthouse Electric Cooperative", "cooperative", "none",
        0.0, 0, 0.095, 0, 32, False, False,
        "No net metering policy. Energy sent to grid is uncompensated.",
        max_system_size=25,
    ),
    SolarProgram(
        "Lyntegar Electric Cooperative", "cooperative", "avoided_cost",
        0.046, 51, 0.09, 0, 29, False, False,
        "Avoided-cost policy at 51% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Magic Valley Electric Cooperative", "cooperative", "full",
        0.111, 100, 0.111, 0, 26, False, False,
        "Full retail credit for surplus generation with no additional "
        "fees.",
        max_system_size=25,
    ),
    SolarProgram(
        "Medina Electric Cooperative", "cooperative", "avoided_cost",
        0.0499, 46, 0.1083, 0, 24, False, False,
        "Avoided-cost buyback at 46% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Navarro County Electric Cooperative", "cooperative", "avoided_cost",
        0.051, 39, 0.13, 0, 27, False, False,
        "Avoided-cost policy at 39% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Navasota Valley Electric Cooperative", "cooperative", "full",
        0.11, 100, 0.11, 0, 25, False, False,
        "Full 100% credit for surplus generation with no fees.",
        max_system_size=25,
    ),
    SolarProgram(
        "North Plains Electric Cooperative", "cooperative", "full",
        0.0973, 100, 0.0973, 18, 30, False, False,
        "Avoided-cost rate equals retail rate, effectively net metering. "
        "$18/month DG meter fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Nueces Electric Cooperative", "cooperative", "avoided_cost",
        0.0625, 42, 0.15, 19.5, 28, False, False,
        "Avoided-cost buyback with $19.50/month solar fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Panola-Harrison Electric Cooperative", "cooperative", "avoided_cost",
        0.0573, 65, 0.088, 0, 23, False, False,
        "Avoided-cost policy at 65% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Pedernales Electric Cooperative (PEC)", "cooperative", "avoided_cost",
        0.06, 58, 0.1038, 0, 25, False, False,
        "Avoided-cost buyback at cooperative's avoided power cost. Does "
        "not offer full retail net metering.",
        max_system_size=25,
        website="https://www.pec.coop/solar",
    ),
    SolarProgram(
        "Rio Grande Electric Cooperative", "cooperative", "avoided_cost",
        0.055, 39, 0.141, 0, 38.75, False, False,
        "Avoided-cost policy with high base charge but no solar fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Rusk County Electric Cooperative", "cooperative", "avoided_cost",
        0.066, 63, 0.105, 0, 24, False, False,
        "Avoided-cost buyback at 63% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Sam Houston Electric Cooperative", "cooperative", "avoided_cost",
        0.045, 35, 0.129, 0, 26, False, False,
        "Avoided-cost policy, no full net metering. Buyback rider at "
        "avoided-cost rates (4-5¢/kWh in 2023).",
        max_system_size=25,
    ),
    SolarProgram(
        "San Bernard Electric Cooperative", "cooperative", "avoided_cost",
        0.0655, 47, 0.14, 0, 27, False, False,
        "Avoided-cost policy at 47% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "San Patricio Electric Cooperative", "cooperative", "full",
        0.141, 100, 0.141, 12, 28, False, False,
        "Net metering with full 1:1 credit and $12/month DG fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "South Plains Electric Cooperative", "cooperative", "full",
        0.0974, 100, 0.0974, 11.47, 29, False, False,
        "Net metering with 100% credit and $11.47/month solar charge.",
        max_system_size=25,
    ),
    SolarProgram(
        "Southwest Rural Electric Association", "cooperative", "avoided_cost",
        0.03, 24, 0.125, 24, 32, False, False,
        "Low avoided-cost rate with $24/month solar fee. Poor economics.",
        max_system_size=25,
    ),
    SolarProgram(
        "Southwest Texas Electric Cooperative", "cooperative", "avoided_cost",
        0.035, 34, 0.103, 0, 26, False, False,
        "Avoided-cost buyback at 34% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "Swisher Electric Cooperative", "cooperative", "avoided_cost",
        0.024, 26, 0.092, 15, 31, False, False,
        "Low avoided-cost rate with $15/month DG fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Taylor Electric Cooperative", "cooperative", "avoided_cost",
        0.025, 20, 0.125, 0, 39.95, False, False,
        "Very low avoided-cost rate at only 20% of retail. High base fee "
        "but no additional solar charge.",
        max_system_size=25,
    ),
    SolarProgram(
        "Tri-County Electric Cooperative", "cooperative", "full",
        0.1443, 100, 0.1443, 12, 25, False, False,
        "Net metering with full retail credit and $12/month solar rider. "
        "Openly promotes solar buyback program.",
        max_system_size=25,
    ),
    SolarProgram(
        "Trinity Valley Electric Cooperative", "cooperative", "avoided_cost",
        0.0768, 73, 0.1048, 0, 24, False, False,
        "Avoided-cost policy at 73% of retail rate.",
        max_system_size=25,
    ),
    SolarProgram(
        "United Electric Cooperative Services", "cooperative", "full",
        0.14, 100, 0.14, 18.5, 27, False, False,
        "Net metering with 1:1 credit and $18.50/month solar metering "
        "fee.",
        max_system_size=25,
    ),
    SolarProgram(
        "Upshur Rural Electric Cooperative", "cooperative", "full",
        0.105, 100, 0.105, 0, 23, False, False,
        "Net metering with full credit, no additional DG fees. Excellent "
        "cooperative policy.",
        max_system_size=25,
    ),
    SolarProgram(
        "Victoria Electric Cooperative", "cooperative", "avoided_cost",
        0.04, 41, 0.0981, 10, 26, False, False,
        "Avoided-cost buyback with $10/month solar charge.",
        max_system_size=25,
    ),
    SolarProgram(
        "Wharton County Electric Cooperative", "cooperative", "avoided_cost",
        0.0469, 32, 0.1468, 15, 28, False, False,
        "Avoided-cost policy with $15/month DG customer charge.",
        max_system_size=25,
    ),
    SolarProgram(
        "Wise Electric Cooperative", "cooperative", "full",
        0.13, 100, 0.13, 10, 27, False, False,
        "Net metering with full retail credit and $10/month solar rider.",
        max_system_size=25,
    ),
    SolarProgram(
        "Wood County Electric Cooperative", "cooperative", "avoided_cost",
        0.091, 69, 0.1317, 0, 25, False, False,
        "Avoided-cost policy at 69% of retail rate.",
        max_system_size=25,
    ),

    # Deregulated TDUs
    # Transmission and distribution only; the customer's retail
    # electric provider (REP) sets the buyback plan.
    SolarProgram(
        "Oncor Electric Delivery", "deregulated_tdu", "rep_dependent",
        VARIES, 100, 0.12, 0, 15, False, True,
        "TDU only - net metering through REP solar plans. Must choose REP "
        "with solar buyback plan for 1:1 credit. Oncor offers "
        "solar+battery rebates.",
        max_system_size=2000,
        website="https://www.oncor.com/solar",
    ),
    SolarProgram(
        "CenterPoint Energy", "deregulated_tdu", "rep_dependent",
        VARIES, 100, 0.11, 0, 12, False, False,
        "TDU only - compensation through REP solar plans. CenterPoint "
        "installs bi-directional meter, REP provides buyback credit.",
        max_system_size=2000,
        website="https://www.centerpointenergy.com/solar",
    ),
    SolarProgram(
        "AEP Texas", "deregulated_tdu", "rep_dependent",
        VARIES, 100, 0.1, 0, 18, False, True,
        "TDU only - does not purchase excess energy directly. AEP Texas "
        "offers upfront solar rebates but no net metering billing. Choose "
        "REP with buyback plan.",
        max_system_size=2000,
        website="https://www.aeptexas.com/solar",
    ),
    SolarProgram(
        "Texas-New Mexico Power (TNMP)", "deregulated_tdu", "rep_dependent",
        VARIES, 100, 0.09, 0, 227, False, False,
        "TDU only - compensation through REP plans. TNMP charges ~$227 "
        "for DG meter installation. Buyback through REP selection.",
        max_system_size=2000,
        interconnection_fee=227,
        website="https://www.tnmp.com/solar",
    ),

    # Municipal utilities
    SolarProgram(
        "Austin Energy", "municipal", "full",
        0.097, 100, 0.097, 0, 10, False, True,
        "Full net metering with 1:1 credit. Offers solar rebates and "
        "performance-based incentives.",
        max_system_size=20,
        website="https://austinenergy.com/solar",
    ),
    SolarProgram(
        "CPS Energy", "municipal", "full",
        0.089, 100, 0.089, 0, 12, False, True,
        "Net metering with full retail credit. Offers solar rebates up to "
        "$2,500.",
        max_system_size=25,
        website="https://www.cpsenergy.com/solar",
    ),
    SolarProgram(
        "Bryan Texas Utilities", "municipal", "full",
        0.095, 100, 0.095, 0, 15, False, False,
        "Net metering with 1:1 credit for residential customers.",
        max_system_size=25,
    ),

    # Investor-owned utilities
    SolarProgram(
        "El Paso Electric", "iou", "full",
        0.11, 100, 0.11, 0, 13, False, True,
        "Net metering with full retail credit. Serves both Texas and New "
        "Mexico.",
        max_system_size=30,
        website="https://www.epelectric.com/solar",
    ),
    SolarProgram(
        "Xcel Energy", "iou", "full",
        0.085, 100, 0.085, 0, 11, False, True,
        "Net metering with full retail credit. Serves portions of the "
        "Texas Panhandle.",
        max_system_size=120,
        website="https://www.xcelenergy.com/solar",
    ),
)

SOLAR_PROGRAMS: dict[str, SolarProgram] = {p.utility_name: p for p in _PROGRAMS}

UTILITY_TYPE_LABELS = {
    "cooperative": "Electric Cooperative",
    "municipal": "Municipal Utility",
    "deregulated_tdu": "Deregulated TDU",
    "iou": "Investor-Owned Utility",
}

POLICY_DESCRIPTIONS = {
    "full": "Full Net Metering (1:1 credit)",
    "avoided_cost": "Avoided Cost Buyback",
    "none": "No Solar Buyback",
    "rep_dependent": "REP Dependent (Deregulated)",
}

_POLICY_SCORES = {"full": 3, "avoided_cost": 2, "rep_dependent": 1, "none": 0}


# ======================================================================
# Lookups
# ======================================================================


def get_solar_program(utility_name: str) -> SolarProgram | None:
    """Exact-name lookup; ``None`` for an unknown utility."""
    return SOLAR_PROGRAMS.get(utility_name)


def list_solar_programs() -> list[SolarProgram]:
    return sorted(SOLAR_PROGRAMS.values(), key=lambda p: p.utility_name)


def get_utility_type(utility_name: str) -> str:
    program = get_solar_program(utility_name)
    if program is None:
        return "unknown"
    return UTILITY_TYPE_LABELS.get(program.type, "Unknown")


def get_policy_description(policy: str) -> str:
    return POLICY_DESCRIPTIONS.get(policy, "Unknown Policy")


def _active() -> list[SolarProgram]:
    return [p for p in SOLAR_PROGRAMS.values() if p.program_status == "active"]


def best_programs_for_solar(limit: int = 10) -> list[SolarProgram]:
    """Active programmes ranked by policy, then by buyback percentage.

    Full net metering ranks above avoided cost, then REP-dependent, then
    no buyback at all.
    """
    ranked = sorted(
        _active(),
        key=lambda p: (_POLICY_SCORES.get(p.net_metering_policy, 0), p.buyback_percentage),
        reverse=True,
    )
    return ranked[:limit]


def worst_programs_for_solar(limit: int = 10) -> list[SolarProgram]:
    """Active programmes ranked by DG fee plus the buyback shortfall."""

    def effective_cost(program: SolarProgram) -> float:
        shortfall = 100 if program.buyback_percentage == 0 else 100 - program.buyback_percentage
        return program.dg_fee + shortfall

    return sorted(_active(), key=effective_cost, reverse=True)[:limit]


# ======================================================================
# Savings
# ======================================================================


def calculate_monthly_solar_savings(
    monthly_usage_kwh: float,
    monthly_production_kwh: float,
    retail_rate: float,
    buyback_rate: BuybackRate,
    dg_fee: float = 0.0,
    connection_fee: float = 0.0,
) -> dict[str, float]:
    """Monthly bill savings under a utility's buyback terms.

    Production up to the household's usage offsets purchases at the
    retail rate; the surplus is exported at the buyback rate.  A
    ``"varies"`` buyback (REP-dependent areas) is assumed to match retail.

    Parameters
    ----------
    monthly_usage_kwh : float
        Household consumption for the month.
    monthly_production_kwh : float
        PV production for the month.
    retail_rate : float
        Retail energy price ($/kWh).
    buyback_rate : float or "varies"
        Export credit ($/kWh).
    dg_fee, connection_fee : float
        Fixed monthly charges subtracted from the gross savings.

    Returns
    -------
    dict
        ``gross_savings``, ``net_savings``, ``export_credits`` (rounded to
        cents) and ``fees``.
    """
    usage = require_number("monthly_usage_kwh", monthly_usage_kwh)
    production = require_number("monthly_production_kwh", monthly_production_kwh)
    retail = require_number("retail_rate", retail_rate)
    if isinstance(buyback_rate, str):
        if buyback_rate != VARIES:
            raise CalculationInputError(
                f"buyback_rate must be a number or {VARIES!r}, got {buyback_rate!r}"
            )
        buyback = retail
    else:
        buyback = require_number("buyback_rate", buyback_rate)
    fees = require_number("dg_fee", dg_fee) + require_number("connection_fee", connection_fee)

    offset = min(usage, production)
    excess = max(0.0, production - usage)

    export_credits = excess * buyback
    gross = offset * retail + export_credits
    return {
        "gross_savings": round(gross, 2),
        "net_savings": round(gross - fees, 2),
        "export_credits": round(export_credits, 2),
        "fees": fees,
    }
