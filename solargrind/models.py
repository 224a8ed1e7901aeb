"""Value records passed between the calculator stages.

All records are frozen dataclasses: each quote request builds them once,
passes them forward, and throws them away.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


class CalculationInputError(ValueError):
    """Raised when a numeric input is missing, negative or not a number."""


class Orientation(str, Enum):
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


class ShadingLevel(str, Enum):
    NONE = "none"
    MINIMAL = "minimal"
    MODERATE = "moderate"
    HEAVY = "heavy"


class HeatingType(str, Enum):
    GAS = "gas"
    ELECTRIC = "electric"
    HEAT_PUMP = "heat_pump"
    NONE = "none"


class FinancingMethod(str, Enum):
    CASH = "cash"
    LOAN = "loan"


def require_number(
    name: str,
    value: float | None,
    *,
    minimum: float = 0.0,
    strict: bool = False,
) -> float:
    """Validate *value* as a finite number ``>= minimum`` (``>`` if *strict*).

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CalculationInputError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise CalculationInputError(f"{name} must be finite, got {value!r}")
    if strict and value <= minimum:
        raise CalculationInputError(f"{name} must be greater than {minimum}, got {value}")
    if not strict and value < minimum:
        raise CalculationInputError(f"{name} must be at least {minimum}, got {value}")
    return value


def coerce_enum(enum_cls: type[Enum], name: str, value: object) -> Enum:
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise CalculationInputError(f"{name} must be one of {choices}, got {value!r}") from None


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SiteProfile:
    """Roof and location facts for one property."""

    orientation: Orientation = Orientation.S
    tilt_degrees: float = 25.0
    shading: ShadingLevel = ShadingLevel.NONE
    peak_sun_hours: float = 4.5
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    def __post_init__(self) -> None:
        tilt = require_number("tilt_degrees", self.tilt_degrees)
        if tilt > 60.0:
            raise CalculationInputError(f"tilt_degrees must be between 0 and 60, got {tilt}")
        require_number("peak_sun_hours", self.peak_sun_hours, strict=True)
        # Accept plain strings from callers that skip the enums.
        object.__setattr__(
            self, "orientation", coerce_enum(Orientation, "orientation", self.orientation)
        )
        object.__setattr__(
            self, "shading", coerce_enum(ShadingLevel, "shading", self.shading)
        )


@dataclass(frozen=True)
class UsageProfile:
    """Household electricity usage, either measured or to be estimated."""

    electricity_rate: float
    monthly_bill: float | None = None
    monthly_kwh: float | None = None
    has_pool: bool = False
    has_ev: bool = False
    heating_type: HeatingType = HeatingType.GAS
    square_footage: float | None = None
    occupants: int | None = None
    offset_percent: float = 100.0

    def __post_init__(self) -> None:
        require_number("electricity_rate", self.electricity_rate, strict=True)
        if self.monthly_bill is not None:
            require_number("monthly_bill", self.monthly_bill)
        if self.monthly_kwh is not None:
            require_number("monthly_kwh", self.monthly_kwh)
        if self.square_footage is not None:
            require_number("square_footage", self.square_footage, strict=True)
        if self.occupants is not None:
            require_number("occupants", self.occupants, minimum=1)
        offset = require_number("offset_percent", self.offset_percent, strict=True)
        if offset > 150.0:
            raise CalculationInputError(f"offset_percent must be at most 150, got {offset}")
        object.__setattr__(
            self, "heating_type", coerce_enum(HeatingType, "heating_type", self.heating_type)
        )


@dataclass(frozen=True)
class FinancingTerms:
    method: FinancingMethod = FinancingMethod.CASH
    apr: float | None = None                # fraction, e.g. 0.0799
    term_months: int | None = None
    down_payment_percent: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "method", coerce_enum(FinancingMethod, "method", self.method)
        )
        if self.apr is not None:
            require_number("apr", self.apr)
        if self.term_months is not None:
            if isinstance(self.term_months, bool) or not isinstance(self.term_months, int):
                raise CalculationInputError(
                    f"term_months must be a whole number of months, got {self.term_months!r}"
                )
            require_number("term_months", self.term_months, minimum=1)
        pct = require_number("down_payment_percent", self.down_payment_percent)
        if pct > 100.0:
            raise CalculationInputError(f"down_payment_percent must be at most 100, got {pct}")


@dataclass(frozen=True)
class IncentiveOptions:
    federal_credit_enabled: bool = True
    state_rebate: float = 0.0
    utility_rebate: float = 0.0

    def __post_init__(self) -> None:
        require_number("state_rebate", self.state_rebate)
        require_number("utility_rebate", self.utility_rebate)


@dataclass(frozen=True)
class QuoteInputs:
    """Everything one quote calculation needs."""

    site: SiteProfile
    usage: UsageProfile
    financing: FinancingTerms = field(default_factory=FinancingTerms)
    incentives: IncentiveOptions = field(default_factory=IncentiveOptions)
    panel_wattage: float | None = None
    cost_per_watt: float | None = None
    battery_capacity_kwh: float | None = None
    inverter_type: str | None = None

    def __post_init__(self) -> None:
        if self.panel_wattage is not None:
            require_number("panel_wattage", self.panel_wattage, strict=True)
        if self.cost_per_watt is not None:
            require_number("cost_per_watt", self.cost_per_watt)
        if self.battery_capacity_kwh is not None:
            require_number("battery_capacity_kwh", self.battery_capacity_kwh)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UsageEstimate:
    monthly_kwh: float
    annual_kwh: float
    source: str                             # "direct" | "bill" | "heuristic"


@dataclass(frozen=True)
class SystemDesign:
    panel_wattage: float
    panel_count: int
    system_size_kw: float
    inverter_type: str
    battery_capacity_kwh: float | None = None


@dataclass(frozen=True)
class ProductionEstimate:
    annual_kwh: float
    monthly_kwh: tuple[float, ...]
    performance_ratio: float
    capacity_factor: float
    specific_yield_kwh_per_kw: float


@dataclass(frozen=True)
class LoanYear:
    year: int
    payment: float
    principal_payment: float
    interest_payment: float
    remaining_balance: float


@dataclass(frozen=True)
class LoanSummary:
    principal: float
    apr: float
    term_months: int
    down_payment: float
    monthly_payment: float
    total_paid: float
    total_interest: float
    schedule: tuple[LoanYear, ...]


@dataclass(frozen=True)
class YearProjection:
    year: int
    bill_without_solar: float
    bill_with_solar: float
    annual_savings: float
    cumulative_savings: float


@dataclass(frozen=True)
class IncentiveBreakdown:
    federal_credit: float
    state_rebate: float
    utility_rebate: float

    @property
    def total(self) -> float:
        return self.federal_credit + self.state_rebate + self.utility_rebate


@dataclass(frozen=True)
class FinancialProjection:
    system_cost: float
    incentives: IncentiveBreakdown
    net_cost: float
    annual_savings: float
    monthly_savings: float
    payback_years: float | None
    yearly: tuple[YearProjection, ...]
    breakeven_year: int | None
    lifetime_savings: float
    npv: float
    irr: float | None
    roi_percent: float | None
    offset_percent: float
    loan: LoanSummary | None = None

    @property
    def incentives_total(self) -> float:
        return self.incentives.total

    @property
    def monthly_loan_payment(self) -> float | None:
        return self.loan.monthly_payment if self.loan else None


@dataclass(frozen=True)
class EnvironmentalImpact:
    co2_tons_per_year: float
    trees_equivalent_per_year: float
    co2_tons_lifetime: float


@dataclass(frozen=True)
class QuoteResult:
    usage: UsageEstimate
    design: SystemDesign
    production: ProductionEstimate
    financials: FinancialProjection
    environment: EnvironmentalImpact
