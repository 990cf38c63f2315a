"""Health and readiness check routes."""

import logging
import platform
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

SERVICE_NAME = "podsite-api"
VERSION = "2.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@router.get("/ready")
async def ready(request: Request) -> dict:
    """Lightweight readiness check. All data is in memory, so there is nothing external to check."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "commit": request.app.state.settings.git_sha,
        "timestamp": _now(),
    }


@router.get("/health")
async def health(request: Request) -> dict:
    """Liveness check with process uptime and runtime info."""
    state = request.app.state
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": VERSION,
        "commit": state.settings.git_sha,
        "uptime_seconds": round(time.monotonic() - state.started_at, 3),
        "timestamp": _now(),
        "python_version": platform.python_version(),
    }
