"""Health check endpoint for the Cleo files API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from cleo.config import APP_ENV, APP_VERSION

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Service status and version. Makes no downstream calls."""
    return {
        "status": "healthy",
        "service": "Cleo Files API",
        "version": APP_VERSION,
        "environment": APP_ENV,
        "timestamp": datetime.now(UTC).isoformat(),
    }
