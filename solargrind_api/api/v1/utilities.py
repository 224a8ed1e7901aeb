"""Utility solar programme reference endpoints."""
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from solargrind.models import CalculationInputError
from solargrind.utilities.detection import detect_utility_from_address
from solargrind.utilities.programs import (
    SolarProgram,
    best_programs_for_solar,
    calculate_monthly_solar_savings,
    get_policy_description,
    get_solar_program,
    get_utility_type,
    list_solar_programs,
    worst_programs_for_solar,
)
from solargrind_api.schemas.utility import (
    AddressResponse,
    SavingsRequest,
    SavingsResponse,
    SolarProgramResponse,
    UtilityDetectionResponse,
)

router = APIRouter()


def _to_response(program: SolarProgram) -> SolarProgramResponse:
    return SolarProgramResponse(
        utility_name=program.utility_name,
        type=program.type,
        type_label=get_utility_type(program.utility_name),
        net_metering_policy=program.net_metering_policy,
        policy_description=get_policy_description(program.net_metering_policy),
        buyback_rate=program.buyback_rate,
        buyback_percentage=program.buyback_percentage,
        retail_rate=program.retail_rate,
        dg_fee=program.dg_fee,
        connection_fee=program.connection_fee,
        demand_charges=program.demand_charges,
        solar_rebates=program.solar_rebates,
        notes=program.notes,
        max_system_size=program.max_system_size,
        interconnection_fee=program.interconnection_fee,
        program_status=program.program_status,
        website=program.website,
        last_updated=program.last_updated,
    )


def _get_or_404(name: str) -> SolarProgram:
    program = get_solar_program(name)
    if program is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown utility: {name}",
        )
    return program


@router.get(
    "",
    response_model=list[SolarProgramResponse],
    summary="List utility solar programmes",
)
async def list_programs(
    rank: Literal["best", "worst"] | None = Query(default=None, description="Rank for solar friendliness"),
    limit: int = Query(default=100, ge=1, le=100),
) -> list[SolarProgramResponse]:
    if rank == "best":
        programs = best_programs_for_solar(limit)
    elif rank == "worst":
        programs = worst_programs_for_solar(limit)
    else:
        programs = list_solar_programs()[:limit]
    return [_to_response(p) for p in programs]


@router.get(
    "/detect",
    response_model=UtilityDetectionResponse,
    summary="Detect the utility serving an address",
    description="ZIP code lookup first, then city, then regional suggestions.",
)
async def detect_utility(
    address: str = Query(min_length=3, max_length=300, description="One-line street address"),
) -> UtilityDetectionResponse:
    detection = detect_utility_from_address(address)
    parts = detection.address
    return UtilityDetectionResponse(
        address=AddressResponse(
            street=parts.street, city=parts.city, state=parts.state, zip_code=parts.zip_code,
        ),
        utility_name=detection.utility,
        program=_to_response(detection.program) if detection.program else None,
        confidence=detection.confidence,
        method=detection.method,
        alternatives=list(detection.alternatives),
        warnings=list(detection.warnings),
    )


@router.get(
    "/{name}",
    response_model=SolarProgramResponse,
    summary="Get one utility's solar programme",
)
async def get_program(name: str) -> SolarProgramResponse:
    return _to_response(_get_or_404(name))


@router.post(
    "/{name}/savings",
    response_model=SavingsResponse,
    summary="Monthly savings under a utility's buyback terms",
)
async def program_savings(name: str, body: SavingsRequest) -> SavingsResponse:
    program = _get_or_404(name)
    try:
        savings = calculate_monthly_solar_savings(
            body.monthly_usage_kwh,
            body.monthly_production_kwh,
            program.retail_rate,
            program.buyback_rate,
            dg_fee=program.dg_fee,
            connection_fee=program.connection_fee,
        )
    except CalculationInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    return SavingsResponse(utility_name=program.utility_name, **savings)
