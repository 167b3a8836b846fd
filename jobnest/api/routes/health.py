"""
Health check routes.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
import redis.asyncio as redis

from jobnest.core.database import get_db
from jobnest.core.config import settings
from jobnest.schemas.base import BaseSchema

router = APIRouter(tags=["health"])


class HealthResponse(BaseSchema):
    """Health check response."""

    status: str
    timestamp: str
    checks: dict


async def _check_redis() -> str:
    if not settings.rate_limit_enabled:
        return "disabled"
    try:
        r = redis.from_url(settings.redis_url)
        await r.ping()
        await r.aclose()
        return "healthy"
    except (redis.RedisError, OSError) as e:
        return f"unhealthy: {str(e)}"


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Always answers 200; `status` is "degraded" when a dependency is down.
    """
    checks = {}

    # The user store backs identity synchronization on every request
    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except Exception as e:
        checks["database"] = f"unhealthy: {str(e)}"

    checks["redis"] = await _check_redis()

    all_healthy = all(v in ("healthy", "disabled") for v in checks.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
    )
