"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the document store is not configured (readiness)

Design Decisions:
    - Readiness does not call GitHub: a probe every few seconds would burn the
      API rate limit; configuration presence is the check
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import exambank.infrastructure.document_store as document_store
from exambank.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "exam-bank-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — document client built from valid configuration."""
    if document_store.document_client is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "document_store_unconfigured",
            },
        )
    return {
        "status": "ready",
        "checks": {"document_store": get_settings().document_backend},
    }
