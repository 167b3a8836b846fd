"""
Rate limiting configuration using slowapi.

Uses Redis as the backend so limits are shared across workers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from jobnest.core.config import settings


def _get_subject_or_ip(request: Request) -> str:
    """
    Rate-limit key: the caller's subject id if authenticated, otherwise client IP.

    The identity gate runs before any route, so the security context is
    already on request.state when a limited route is reached.
    """
    context = getattr(request.state, "security_context", None)
    if context is not None and context.subject_id:
        return f"sub:{context.subject_id}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=_get_subject_or_ip,
    storage_uri=settings.redis_url,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)

# Pre-defined rate limit strings for use in route decorators:
#   @limiter.limit(RATE_WRITE)
RATE_WRITE = "30/minute"         # create job / company / review
