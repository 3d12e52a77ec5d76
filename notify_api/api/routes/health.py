"""Health, readiness and metrics endpoints."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notify_api.api.dependencies import get_database
from notify_api.core.errors import NotificationApiError
from notify_api.core.telemetry import get_metrics
from notify_api.services.hashing import NOTIFICATION_NAMESPACE
from notify_api.services.realtime_repo import ping

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness: minimal check, <10ms."""
    return {"status": "ok"}


def _database_or_none() -> Any:
    try:
        return get_database()
    except NotificationApiError:
        return None


@router.get("/readiness", response_model=None)
def readiness(root: Any = Depends(_database_or_none)):
    """Readiness: verify the Realtime Database is configured and reachable."""
    if root is None:
        return JSONResponse(
            status_code=503,
            content={"status": "unready", "error": "Realtime Database not configured"},
        )
    try:
        ping(root, NOTIFICATION_NAMESPACE)
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={"status": "unready", "error": str(e)},
        )
    return {"status": "ready"}


@router.get("/metrics")
async def metrics() -> dict:
    """Simple JSON metrics endpoint for operational visibility."""
    return get_metrics()
