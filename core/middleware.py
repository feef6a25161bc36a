from __future__ import annotations

import math
import time
import uuid

from fastapi import Request
from limits import RateLimitItem, parse
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from core.errors import ErrorCode
from core.response_envelope import error_response


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Process-Time"] = str(time.time() - start_time)
        return response


def client_key(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitingMiddleware(BaseHTTPMiddleware):
    """Fixed-window limit per client address, applied to paths under ``path_prefix``."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        rule: str,
        storage_uri: str = "memory://",
        path_prefix: str = "/api",
    ) -> None:
        super().__init__(app)
        self._rule: RateLimitItem = parse(rule)
        self._limiter = FixedWindowRateLimiter(storage_from_string(storage_uri))
        self._path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self._path_prefix):
            return await call_next(request)

        key = client_key(request)
        allowed = self._limiter.hit(self._rule, key)
        reset_time, remaining = self._limiter.get_window_stats(self._rule, key)
        seconds_until_reset = max(math.ceil(reset_time - time.time()), 0)

        headers = {
            "X-RateLimit-Limit": str(self._rule.amount),
            "X-RateLimit-Remaining": str(max(remaining, 0)),
            "X-RateLimit-Reset": str(seconds_until_reset),
        }

        if not allowed:
            headers["Retry-After"] = str(seconds_until_reset)
            return error_response(
                status_code=429,
                message="Too Many Requests",
                data={
                    "code": ErrorCode.TOO_MANY_REQUESTS.value,
                    "details": {"retry_after_seconds": seconds_until_reset},
                },
                headers=headers,
                request_id=getattr(request.state, "request_id", None),
            )

        response = await call_next(request)
        for header, value in headers.items():
            response.headers[header] = value
        return response
