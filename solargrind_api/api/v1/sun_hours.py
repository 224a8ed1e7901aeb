"""Peak sun hours lookup endpoint."""
from fastapi import APIRouter, Depends

from solargrind_api.core.rate_limit import sun_hours_limiter
from solargrind_api.schemas.sun_hours import SunHoursRequest, SunHoursResponse
from solargrind_api.services.sun_hours_service import resolve_sun_hours

router = APIRouter()


@router.post(
    "",
    response_model=SunHoursResponse,
    summary="Resolve peak sun hours",
    description="NREL solar resource data when configured, otherwise a latitude-based estimate.",
    dependencies=[Depends(sun_hours_limiter)],
)
async def lookup_sun_hours(body: SunHoursRequest) -> SunHoursResponse:
    result = await resolve_sun_hours(body.latitude, body.longitude)
    return SunHoursResponse(
        sun_hours=round(result.sun_hours, 2),
        source=result.source,
        latitude=result.latitude,
        longitude=result.longitude,
    )
