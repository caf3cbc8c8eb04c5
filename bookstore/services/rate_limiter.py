"""
Rate Limiting Service

Implements rate limiting using slowapi to protect the API from abuse.

Rate Limit Tiers:
=================
- Reads (catalog pages, single books): RATE_LIMIT_DEFAULT (100/minute)
- Writes (create, update, delete): RATE_LIMIT_WRITE (30/minute)

Counters live in memory by default; point RATE_LIMIT_STORAGE_URI at
Redis when running several API instances behind a load balancer.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from bookstore.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Get client IP address for rate limiting.

    Handles common proxy headers to get the real client IP.
    Falls back to direct connection IP if no proxy headers.
    """
    # X-Forwarded-For can contain multiple IPs; first is the client
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    # nginx
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """Create and configure the rate limiter."""
    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=settings.rate_limit_storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"default: {settings.rate_limit_default}, write: {settings.rate_limit_write}"
    )

    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Custom handler for rate limit exceeded errors.

    Returns 429 Too Many Requests with a Retry-After header and a
    JSON body the frontend can show as-is.
    """
    limit_detail = str(exc.detail)

    response = JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": limit_detail,
        },
    )

    response.headers["Retry-After"] = str(60)
    response.headers["X-RateLimit-Limit"] = limit_detail

    logger.warning(
        f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}"
    )

    return response
