"""Liveness routes."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone
import time

from fastapi import APIRouter
from fastapi import Depends

from storefront.api.dependencies import get_app_settings
from storefront.core.config import Settings

router = APIRouter(prefix="/api", tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/health")
def health(settings: Settings = Depends(get_app_settings)) -> dict[str, object]:
    """Health check endpoint for service readiness."""
    return {
        "success": True,
        "message": "Storefront API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@router.get("/keep-alive")
def keep_alive() -> dict[str, object]:
    """Cheap endpoint hit by the keep-alive pinger."""
    return {
        "success": True,
        "message": "Server is awake!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }
