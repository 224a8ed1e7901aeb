"""Per-client rate limiting for the PDF and NREL-backed endpoints.

Report rendering (matplotlib + reportlab) and NREL lookups are the only
calls that cost real time or third-party quota, so only those routes are
limited.  Each limiter is a FastAPI dependency::

    @router.post("/report", dependencies=[Depends(report_limiter)])
"""

from __future__ import annotations

import math
import time
from collections import defaultdict, deque
from collections.abc import Callable

from fastapi import HTTPException, Request, status

from solargrind_api.config import settings


class RateLimiter:
    """Sliding-window request counter keyed by client address."""

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self._clock = clock
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._requests: dict[str, deque[float]] = defaultdict(deque)

    def client_key(self, request: Request) -> str:
        if settings.trust_forwarded_for:
            forwarded = request.headers.get("x-forwarded-for")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def retry_after(self, key: str, now: float) -> int:
        """Whole seconds until the oldest request in the window expires."""
        hits = self._requests[key]
        if not hits:
            return 0
        return max(1, math.ceil(hits[0] + self.window_seconds - now))

    def check(self, request: Request) -> None:
        now = self._clock()
        key = self.client_key(request)
        hits = self._requests[key]
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()

        if len(hits) >= self.max_requests:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=(
                    f"Too many {self.name} requests. "
                    f"Max {self.max_requests} per {self.window_seconds}s."
                ),
                headers={"Retry-After": str(self.retry_after(key, now))},
            )
        hits.append(now)

    async def __call__(self, request: Request) -> None:
        self.check(request)

    def reset(self) -> None:
        self._requests.clear()


report_limiter = RateLimiter(
    "report", settings.report_rate_limit, settings.rate_limit_window_seconds
)
sun_hours_limiter = RateLimiter(
    "sun-hours", settings.sun_hours_rate_limit, settings.rate_limit_window_seconds
)
