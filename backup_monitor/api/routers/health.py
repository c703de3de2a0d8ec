"""Service health endpoints."""

from fastapi import APIRouter, HTTPException, Request
from typing import Dict

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/ready")
async def readiness_probe(request: Request) -> Dict[str, str]:
    """Kubernetes readiness probe."""
    if getattr(request.app.state, "storage", None) is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return {"status": "ready"}


@router.get("/live")
async def liveness_probe() -> Dict[str, str]:
    """Kubernetes liveness probe."""
    return {"status": "alive"}
