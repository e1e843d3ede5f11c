"""Liveness and readiness probes.

/health answers "is the process alive?" and reports each backing service;
it returns 200 even when degraded so an orchestrator does not restart a
process that merely lost a dependency.

/ready answers "can this instance take traffic?"  The database is critical
when configured (attempts cannot be recorded without it); Redis is not,
because question lists can be served from the store.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from proficiency.db.engine import engine, ping_database
from proficiency.db.redis import redis_pool

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


async def _database_check() -> str:
    if engine is None:
        return "not_configured"
    try:
        await ping_database()
    except (SQLAlchemyError, OSError):
        logger.warning("Database ping failed", exc_info=True)
        return "degraded"
    return "ok"


async def _redis_check() -> str:
    if redis_pool is None:
        return "not_configured"
    try:
        await redis_pool.ping()  # type: ignore[misc]
    except RedisError:
        logger.warning("Redis ping failed", exc_info=True)
        return "degraded"
    return "ok"


@router.get("/health")
async def health() -> dict:
    checks = {
        "database": await _database_check(),
        "redis": await _redis_check(),
    }
    overall = "degraded" if "degraded" in checks.values() else "ok"
    return {"status": overall, "checks": checks}


@router.get("/ready")
async def ready() -> Response:
    if await _database_check() == "degraded":
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(status_code=status.HTTP_200_OK)
