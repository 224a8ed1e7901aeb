"""Map quote request bodies onto the calculator and back."""
from solargrind.calculator import calculate_quote
from solargrind.models import (
    FinancingTerms,
    IncentiveOptions,
    QuoteInputs,
    QuoteResult,
    SiteProfile,
    UsageProfile,
)
from solargrind_api.config import settings
from solargrind_api.schemas.quote import (
    LoanOut,
    LoanYearOut,
    QuoteRequest,
    QuoteResponse,
    UsageOut,
    YearProjectionOut,
)
from solargrind_api.services.sun_hours_service import SunHoursResult, resolve_sun_hours


async def resolve_site_sun_hours(body: QuoteRequest) -> SunHoursResult:
    site = body.site_profile
    if site.peak_sun_hours is not None:
        return SunHoursResult(site.peak_sun_hours, "request", site.latitude, site.longitude)
    return await resolve_sun_hours(site.latitude, site.longitude)


def to_inputs(body: QuoteRequest, peak_sun_hours: float) -> QuoteInputs:
    """Build calculator inputs; APR arrives as a percentage on the wire."""
    site, usage, fin, inc = body.site_profile, body.usage_profile, body.financing, body.incentives
    return QuoteInputs(
        site=SiteProfile(
            orientation=site.orientation,
            tilt_degrees=site.tilt_degrees,
            shading=site.shading_level,
            peak_sun_hours=peak_sun_hours,
            address=site.address,
            latitude=site.latitude,
            longitude=site.longitude,
        ),
        usage=UsageProfile(
            electricity_rate=usage.electricity_rate,
            monthly_bill=usage.monthly_bill,
            monthly_kwh=usage.monthly_kwh,
            has_pool=usage.has_pool,
            has_ev=usage.has_ev,
            heating_type=usage.heating_type,
            square_footage=usage.square_footage,
            occupants=usage.occupants,
            offset_percent=usage.offset_percent,
        ),
        financing=FinancingTerms(
            method=fin.method,
            apr=fin.apr_percent / 100.0 if fin.apr_percent is not None else None,
            term_months=fin.term_months,
            down_payment_percent=fin.down_payment_percent,
        ),
        incentives=IncentiveOptions(
            federal_credit_enabled=inc.federal_credit_enabled,
            state_rebate=inc.state_rebate_amount,
            utility_rebate=inc.utility_rebate_amount,
        ),
        panel_wattage=body.panel_wattage,
        cost_per_watt=body.cost_per_watt,
        battery_capacity_kwh=body.battery_capacity_kwh,
        inverter_type=body.inverter_type,
    )


def to_response(result: QuoteResult, sun: SunHoursResult) -> QuoteResponse:
    design, prod, fin, env = result.design, result.production, result.financials, result.environment

    loan = None
    if fin.loan is not None:
        loan = LoanOut(
            principal=round(fin.loan.principal, 2),
            apr_percent=round(fin.loan.apr * 100.0, 4),
            term_months=fin.loan.term_months,
            down_payment=round(fin.loan.down_payment, 2),
            monthly_payment=round(fin.loan.monthly_payment, 2),
            total_paid=round(fin.loan.total_paid, 2),
            total_interest=round(fin.loan.total_interest, 2),
            schedule=[
                LoanYearOut(
                    year=y.year,
                    payment=y.payment,
                    principal_payment=y.principal_payment,
                    interest_payment=y.interest_payment,
                    remaining_balance=y.remaining_balance,
                )
                for y in fin.loan.schedule
            ],
        )

    return QuoteResponse(
        system_size_kw=round(design.system_size_kw, 3),
        panel_count=design.panel_count,
        panel_wattage=design.panel_wattage,
        inverter_type=design.inverter_type,
        battery_capacity_kwh=design.battery_capacity_kwh,
        annual_production_kwh=round(prod.annual_kwh, 1),
        monthly_production_kwh=[round(m, 1) for m in prod.monthly_kwh],
        performance_ratio=round(prod.performance_ratio, 4),
        capacity_factor=round(prod.capacity_factor, 4),
        peak_sun_hours=sun.sun_hours,
        sun_hours_source=sun.source,
        usage=UsageOut(
            monthly_kwh=round(result.usage.monthly_kwh, 1),
            annual_kwh=round(result.usage.annual_kwh, 1),
            source=result.usage.source,
        ),
        offset_percent=round(fin.offset_percent, 1),
        system_cost=round(fin.system_cost, 2),
        federal_credit=round(fin.incentives.federal_credit, 2),
        state_rebate=round(fin.incentives.state_rebate, 2),
        utility_rebate=round(fin.incentives.utility_rebate, 2),
        incentives_total=round(fin.incentives_total, 2),
        net_cost=round(fin.net_cost, 2),
        monthly_loan_payment=loan.monthly_payment if loan else None,
        loan=loan,
        annual_savings=round(fin.annual_savings, 2),
        monthly_savings=round(fin.monthly_savings, 2),
        payback_years=round(fin.payback_years, 2) if fin.payback_years is not None else None,
        breakeven_year=fin.breakeven_year,
        lifetime_savings=round(fin.lifetime_savings, 2),
        npv=round(fin.npv, 2),
        irr=round(fin.irr, 4) if fin.irr is not None else None,
        roi_percent=round(fin.roi_percent, 1) if fin.roi_percent is not None else None,
        yearly_projection=[
            YearProjectionOut(
                year=y.year,
                bill_without_solar=round(y.bill_without_solar, 2),
                bill_with_solar=round(y.bill_with_solar, 2),
                annual_savings=round(y.annual_savings, 2),
                cumulative_savings=round(y.cumulative_savings, 2),
            )
            for y in fin.yearly
        ],
        co2_tons_per_year=round(env.co2_tons_per_year, 3),
        trees_equivalent_per_year=round(env.trees_equivalent_per_year, 1),
        co2_tons_lifetime=round(env.co2_tons_lifetime, 2),
    )


async def run_quote(body: QuoteRequest) -> tuple[QuoteResult, SunHoursResult]:
    """Resolve sun hours and run the calculator with the configured assumptions."""
    sun = await resolve_site_sun_hours(body)
    result = calculate_quote(to_inputs(body, sun.sun_hours), settings.assumptions())
    return result, sun
