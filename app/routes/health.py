import os
import time
from datetime import datetime, timezone
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse


router = APIRouter()

_started_at = time.time()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/healthz")
async def health_check(request: Request) -> JSONResponse:
    """
    Health check endpoint with database and observability status.

    Does not touch the database; use /healthz/ready for a live check.
    """
    manager = getattr(request.app.state, "db", None)
    response = {
        "status": "ok",
        "timestamp": _timestamp(),
        "database": {
            "configured": manager is not None,
            "connected": bool(manager is not None and manager.is_connected),
        },
    }

    obs_enabled = os.getenv("OBS_ENABLED", "false").lower() == "true"
    response["observability"] = {
        "enabled": obs_enabled,
        "sentry_configured": bool(os.getenv("SENTRY_DSN")),
    }

    return JSONResponse(status_code=200, content=response)


@router.get("/healthz/ready")
def readiness_check(request: Request) -> JSONResponse:
    """
    Readiness check endpoint for container orchestration.

    Returns 503 until the document store answers a ping.
    """
    manager = getattr(request.app.state, "db", None)
    checks = {
        "database": "ok" if manager is not None and manager.ping() else "unavailable",
    }

    all_healthy = all(status == "ok" for status in checks.values())

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "timestamp": _timestamp(),
        "checks": checks,
    }

    status_code = 200 if all_healthy else 503
    return JSONResponse(status_code=status_code, content=response)


@router.get("/healthz/live")
async def liveness_check() -> JSONResponse:
    response = {
        "status": "alive",
        "timestamp": _timestamp(),
        "uptime_seconds": round(time.time() - _started_at, 1),
    }

    return JSONResponse(status_code=200, content=response)
