# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# /health        process is up, with environment and version
# /health/live   liveness for the orchestrator
# /health/ready  database and Redis reachability
#
# Redis only carries real-time delivery; messages are still stored when it is
# down, so a Redis failure reports "degraded" while a database failure
# reports "unavailable".
# =============================================================================

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import DbDep
from app.websocket.broadcast import get_redis_client

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    """Overall status plus one entry per dependency ("ok" or the error)."""
    status: str
    checks: dict[str, str]
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_dependency(name: str, check: Callable[[], object]) -> str:
    try:
        check()
    except Exception as e:
        logger.warning(f"Readiness check '{name}' failed: {e}")
        return f"error: {str(e)[:80]}"
    return "ok"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/live")
async def liveness_check():
    return {"status": "alive", "timestamp": _now()}


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(db: DbDep):
    """
    Query the chats table and the Redis connection.
    """
    checks = {
        "database": _check_dependency(
            "database", lambda: db.fetch_one("chats", {}, columns="id")
        ),
        "realtime": _check_dependency("realtime", lambda: get_redis_client().ping()),
    }

    if checks["database"] != "ok":
        status = "unavailable"
    elif checks["realtime"] != "ok":
        status = "degraded"
    else:
        status = "ready"

    return ReadinessResponse(status=status, checks=checks, timestamp=_now())
