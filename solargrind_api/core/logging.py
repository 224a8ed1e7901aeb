"""Structured logging for the quote service.

Records carry a request ID and, where the caller passes them through
``extra=``, the request or quote fields named in :data:`LOG_FIELDS`.  The
JSON formatter lifts those onto the top level so log pipelines can
aggregate system sizes and sun-hours sources without parsing messages.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextvars import ContextVar
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

ACCESS_LOGGER = "solargrind.access"

# Request fields set by the access log, then quote fields set by the quote routes
LOG_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "system_size_kw",
    "panel_count",
    "net_cost",
    "sun_hours",
    "sun_hours_source",
)

# Polled by load balancers; logged at DEBUG only
_QUIET_PATHS = frozenset({"/health"})


def quote_log_fields(result, sun) -> dict[str, Any]:
    """``extra=`` payload describing one calculated quote."""
    return {
        "system_size_kw": round(result.design.system_size_kw, 2),
        "panel_count": result.design.panel_count,
        "net_cost": round(result.financials.net_cost, 2),
        "sun_hours": round(sun.sun_hours, 2),
        "sun_hours_source": sun.source,
    }


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = request_id_var.get("")
        if rid:
            entry["request_id"] = rid

        for key in LOG_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Echo or assign an X-Request-ID and log each request's timing."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        try:
            start = time.perf_counter()
            response: Response = await call_next(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 1)
            response.headers["X-Request-ID"] = rid

            path = request.url.path
            level = logging.DEBUG if path in _QUIET_PATHS else logging.INFO
            logging.getLogger(ACCESS_LOGGER).log(
                level,
                "%s %s -> %s (%.1fms)",
                request.method,
                path,
                response.status_code,
                duration_ms,
                extra={
                    "method": request.method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            return response
        finally:
            request_id_var.reset(token)


def setup_logging(json_format: bool = False, level: str = "INFO") -> None:
    """Configure the root logger; *json_format* for production deployments."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root.handlers.clear()
    root.addHandler(handler)

    # uvicorn's own access log duplicates ours; matplotlib is chatty at INFO
    for name in ("uvicorn.access", "httpx", "matplotlib"):
        logging.getLogger(name).setLevel(logging.WARNING)
