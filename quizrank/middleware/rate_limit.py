"""
Rate limiting for QuizRank
"""

import logging

from fastapi import FastAPI, Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from quizrank.core.config import settings
from quizrank.core.exceptions import RateLimitException, create_error_response

logger = logging.getLogger(__name__)


def build_limiter() -> Limiter:
    """Per-client limiter with the configured default budget"""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[f"{settings.RATE_LIMIT_REQUESTS}/{settings.RATE_LIMIT_PERIOD} seconds"],
    )


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Render limit breaches in the standard error envelope"""
    error = RateLimitException(details={"limit": str(exc.detail)})
    logger.warning("Rate limit exceeded", extra={"path": request.url.path, "limit": str(exc.detail)})
    return create_error_response(
        request=request,
        status_code=error.status_code,
        error_code=error.error_code,
        message=error.message,
        details=error.details,
    )


def add_rate_limiting(app: FastAPI, limiter: Limiter = None) -> Limiter:
    """
    Attach a limiter to the application

    The limiter lives on ``app.state`` so each application instance owns its
    own counters.
    """
    limiter = limiter or build_limiter()
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    return limiter
