"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /_health always returns 200 if the process is up
    - Reports whether a store is attached and how many resources it holds

Design Decisions:
    - Underscore prefix keeps the probe out of the collection namespace (`/{name}`)
"""

import logging
from fastapi import APIRouter, Request, status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/_health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    store = getattr(request.app.state, "store", None)
    return {
        "status": "healthy",
        "service": "jsonexpand",
        "version": "1.0.0",
        "resources": len(store.names()) if store is not None else 0,
    }
