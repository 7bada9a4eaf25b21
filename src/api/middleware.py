"""
HTTP middleware for the request pipeline.

Order (outermost first): CORS, metrics, rate limiting, then routing where
authentication and authorization run as route dependencies.
"""

import logging
import time

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.api.error import error_body
from src.app.errors import ClientAddressError

logger = logging.getLogger(__name__)


def _client_identity(request: Request) -> str:
    if request.client is None or not request.client.host:
        raise ClientAddressError("Unable to determine client address")
    return request.client.host


async def rate_limit_middleware(request: Request, call_next):
    """Reject requests from clients whose token bucket is empty"""
    limiter = request.app.state.rate_limiter
    metrics = request.app.state.metrics

    try:
        identity = _client_identity(request)
    except ClientAddressError as exc:
        logger.error(f"Rate limiter could not identify client: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                ClientAddressError.code,
                "The server encountered a problem and could not process your request",
            ),
        )

    if not limiter.admit(identity):
        metrics.increment("limiter_rejected")
        logger.info(f"Rate limit exceeded for {identity}")
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=error_body("RATE_LIMIT_EXCEEDED", "Rate limit exceeded"),
            headers={"Retry-After": "1"},
        )

    metrics.increment("limiter_admitted")
    return await call_next(request)


async def metrics_middleware(request: Request, call_next):
    metrics = request.app.state.metrics
    metrics.increment("total_requests_received")
    start = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        # the outer error handler answers with a 500
        duration_us = int((time.perf_counter() - start) * 1_000_000)
        metrics.record_response(status.HTTP_500_INTERNAL_SERVER_ERROR, duration_us)
        raise

    duration_us = int((time.perf_counter() - start) * 1_000_000)
    metrics.record_response(response.status_code, duration_us)
    return response
