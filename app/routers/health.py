"""Health check endpoint: used by load balancers and uptime monitoring."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    """Liveness probe. Returns 200 if the process is running. No upstream call."""
    return {
        "status": "ok",
        "version": request.app.version,
        "model": request.app.state.settings.gemini_model,
    }
