"""Utility solar programme schemas."""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class SolarProgramResponse(BaseModel):
    model_config = CAMEL

    utility_name: str
    type: str
    type_label: str
    net_metering_policy: str
    policy_description: str
    buyback_rate: float | str
    buyback_percentage: float
    retail_rate: float
    dg_fee: float
    connection_fee: float
    demand_charges: bool
    solar_rebates: bool
    notes: str
    max_system_size: float | None = None
    interconnection_fee: float | None = None
    program_status: str
    website: str | None = None
    last_updated: str


class SavingsRequest(BaseModel):
    model_config = CAMEL

    monthly_usage_kwh: float = Field(ge=0.0)
    monthly_production_kwh: float = Field(ge=0.0)


class SavingsResponse(BaseModel):
    model_config = CAMEL

    utility_name: str
    gross_savings: float
    net_savings: float
    export_credits: float
    fees: float


class AddressResponse(BaseModel):
    model_config = CAMEL

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


class UtilityDetectionResponse(BaseModel):
    model_config = CAMEL

    address: AddressResponse
    utility_name: str | None = None
    program: SolarProgramResponse | None = None
    confidence: str = Field(description="high | medium | low")
    method: str = Field(description="zip | city | region | none")
    alternatives: list[str] = []
    warnings: list[str] = []
