"""Request and response bodies for the quote endpoints (camelCase on the wire)."""
from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from solargrind.models import FinancingMethod, HeatingType, Orientation, ShadingLevel

CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class SiteProfileIn(BaseModel):
    model_config = CAMEL

    orientation: Orientation = Orientation.S
    tilt_degrees: float = Field(default=25.0, ge=0.0, le=60.0)
    shading_level: ShadingLevel = ShadingLevel.NONE
    peak_sun_hours: float | None = Field(
        default=None, gt=0.0, le=12.0,
        description="Resolved from coordinates when omitted",
    )
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    address: str | None = Field(default=None, max_length=500)


class UsageProfileIn(BaseModel):
    model_config = CAMEL

    monthly_bill: float | None = Field(default=None, ge=0.0)
    electricity_rate: float = Field(gt=0.0, description="$/kWh")
    monthly_kwh: float | None = Field(default=None, ge=0.0)
    has_pool: bool = False
    has_ev: bool = Field(default=False, alias="hasEV")
    heating_type: HeatingType = HeatingType.GAS
    square_footage: float | None = Field(default=None, gt=0.0)
    occupants: int | None = Field(default=None, ge=1)
    offset_percent: float = Field(default=100.0, gt=0.0, le=150.0)


class FinancingIn(BaseModel):
    model_config = CAMEL

    method: FinancingMethod = FinancingMethod.CASH
    apr_percent: float | None = Field(default=None, ge=0.0, le=100.0, description="e.g. 7.99")
    term_months: int | None = Field(default=None, ge=1, le=480)
    down_payment_percent: float = Field(default=0.0, ge=0.0, le=100.0)


class IncentivesIn(BaseModel):
    model_config = CAMEL

    federal_credit_enabled: bool = True
    state_rebate_amount: float = Field(default=0.0, ge=0.0)
    utility_rebate_amount: float = Field(default=0.0, ge=0.0)


class QuoteRequest(BaseModel):
    model_config = CAMEL

    site_profile: SiteProfileIn
    usage_profile: UsageProfileIn
    financing: FinancingIn = Field(default_factory=FinancingIn)
    incentives: IncentivesIn = Field(default_factory=IncentivesIn)
    panel_wattage: float | None = Field(default=None, gt=0.0, le=1000.0)
    cost_per_watt: float | None = Field(default=None, ge=0.0)
    battery_capacity_kwh: float | None = Field(default=None, ge=0.0)
    inverter_type: Literal["microinverter", "string", "hybrid"] | None = None


class UsageOut(BaseModel):
    model_config = CAMEL

    monthly_kwh: float
    annual_kwh: float
    source: str


class YearProjectionOut(BaseModel):
    model_config = CAMEL

    year: int
    bill_without_solar: float
    bill_with_solar: float
    annual_savings: float
    cumulative_savings: float


class LoanYearOut(BaseModel):
    model_config = CAMEL

    year: int
    payment: float
    principal_payment: float
    interest_payment: float
    remaining_balance: float


class LoanOut(BaseModel):
    model_config = CAMEL

    principal: float
    apr_percent: float
    term_months: int
    down_payment: float
    monthly_payment: float
    total_paid: float
    total_interest: float
    schedule: list[LoanYearOut]


class QuoteResponse(BaseModel):
    model_config = CAMEL

    # System
    system_size_kw: float
    panel_count: int
    panel_wattage: float
    inverter_type: str
    battery_capacity_kwh: float | None = None
    annual_production_kwh: float
    monthly_production_kwh: list[float]
    performance_ratio: float
    capacity_factor: float
    peak_sun_hours: float
    sun_hours_source: str

    # Usage
    usage: UsageOut
    offset_percent: float

    # Money
    system_cost: float
    federal_credit: float
    state_rebate: float
    utility_rebate: float
    incentives_total: float
    net_cost: float
    monthly_loan_payment: float | None = None
    loan: LoanOut | None = None
    annual_savings: float
    monthly_savings: float
    payback_years: float | None = None
    breakeven_year: int | None = None
    lifetime_savings: float
    npv: float
    irr: float | None = None
    roi_percent: float | None = None
    yearly_projection: list[YearProjectionOut]

    # Environment
    co2_tons_per_year: float
    trees_equivalent_per_year: float
    co2_tons_lifetime: float
