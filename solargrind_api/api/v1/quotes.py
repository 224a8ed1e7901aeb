"""Solar quote endpoints."""
import logging
import re

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from solargrind.models import CalculationInputError
from solargrind.reporting.pdf_report import build_quote_report
from solargrind_api.core.logging import quote_log_fields
from solargrind_api.core.rate_limit import report_limiter
from solargrind_api.schemas.quote import QuoteRequest, QuoteResponse
from solargrind_api.services.quote_service import run_quote, to_response

logger = logging.getLogger(__name__)

router = APIRouter()


async def _calculate(body: QuoteRequest):
    try:
        return await run_quote(body)
    except CalculationInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


@router.post(
    "",
    response_model=QuoteResponse,
    summary="Calculate a solar quote",
    description="Size a rooftop PV system for the household and project its cost, savings and CO2 offset.",
)
async def create_quote(body: QuoteRequest) -> QuoteResponse:
    result, sun = await _calculate(body)
    logger.info(
        "Quote %.2f kW (%d panels), net cost $%.0f, sun hours %.2f (%s)",
        result.design.system_size_kw,
        result.design.panel_count,
        result.financials.net_cost,
        sun.sun_hours,
        sun.source,
        extra=quote_log_fields(result, sun),
    )
    return to_response(result, sun)


@router.post(
    "/report",
    summary="Download quote PDF",
    description="Calculate a quote and return it as a printable PDF report.",
    dependencies=[Depends(report_limiter)],
)
async def download_quote_report(body: QuoteRequest):
    result, sun = await _calculate(body)
    logger.info("Rendering quote report", extra=quote_log_fields(result, sun))

    address = body.site_profile.address
    pdf_bytes = build_quote_report(result, address=address)

    slug = re.sub(r"[^A-Za-z0-9]+", "_", address).strip("_")[:50] if address else ""
    filename = f"solar_quote_{slug}.pdf" if slug else "solar_quote.pdf"
    return StreamingResponse(
        iter([pdf_bytes]),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
