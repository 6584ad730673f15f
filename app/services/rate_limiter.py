"""
Rate Limiting Service

Throttles login attempts per client with slowapi, so passwords cannot be
guessed at full speed.

Clients are keyed by the address of the connection. Forwarding headers
sent by the client (X-Forwarded-For, X-Real-IP) are ignored here; behind a
reverse proxy, run uvicorn with --proxy-headers and --forwarded-allow-ips
so only the trusted proxy can set the client address.

Counters live in process memory ("memory://"); each API instance limits
its own clients. Set RATE_LIMIT_ENABLED=false to switch limiting off.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def create_limiter() -> Limiter:
    """Create the limiter; only routes decorated with @limiter.limit are throttled."""
    limiter = Limiter(
        key_func=get_remote_address,
        storage_uri="memory://",
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"login: {settings.login_rate_limit}"
    )

    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Custom handler for rate limit exceeded errors.

    Returns 429 Too Many Requests with a Retry-After header.
    """
    limit_detail = str(exc.detail)

    response = JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "limit": limit_detail,
        },
    )
    response.headers["Retry-After"] = str(60)
    response.headers["X-RateLimit-Limit"] = limit_detail

    logger.warning(
        f"Rate limit exceeded for {get_remote_address(request)}: {limit_detail}"
    )

    return response
