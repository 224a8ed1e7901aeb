from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import solargrind
from solargrind_api.api.v1 import quotes, sun_hours, utilities
from solargrind_api.config import settings
from solargrind_api.core.logging import RequestLoggingMiddleware, setup_logging


def create_app() -> FastAPI:
    setup_logging(json_format=settings.log_json, level=settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        version=solargrind.__version__,
    )

    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(quotes.router, prefix="/api/v1/quotes", tags=["quotes"])
    application.include_router(sun_hours.router, prefix="/api/v1/sun-hours", tags=["sun-hours"])
    application.include_router(utilities.router, prefix="/api/v1/utilities", tags=["utilities"])

    @application.get("/health")
    async def health_check() -> dict:
        return {
            "status": "ok",
            "environment": settings.environment,
            "services": {"nrel": "configured" if settings.nrel_api_key else "estimation_only"},
        }

    return application


app = create_app()
