# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from rotation_service.core.config import settings
from rotation_service.core.dependencies import get_assignment_store, get_history_repo
from rotation_service.repositories.sql_assignment_repository import SqlAssignmentRepository

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe for Docker and orchestration."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "generation_runs": get_history_repo().count(),
    }


@router.get("/health/ready")
def readiness_check():
    """Readiness probe — verifies the assignment store can serve traffic."""
    store = get_assignment_store()
    if isinstance(store, SqlAssignmentRepository):
        try:
            store.verify_connection()
        except Exception as exc:
            raise HTTPException(status_code=503, detail=f"Database unavailable: {exc}")
        backend = "sql"
    else:
        backend = "memory"
    return {"status": "ready", "service": settings.SERVICE_NAME, "store": backend}


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
