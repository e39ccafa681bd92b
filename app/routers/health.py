"""Health check endpoint, used by the hosting platform's uptime monitoring."""

from __future__ import annotations

from fastapi import APIRouter

from app.config import APP_VERSION

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness probe, returns 200 if the process is running."""
    return {"status": "ok", "version": APP_VERSION}
