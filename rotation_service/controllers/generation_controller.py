# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Assignment generation, preview and listing endpoints.
Thin HTTP layer — delegates ALL logic to GenerationService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from rotation_service.core.dependencies import get_generation_service, get_history_repo
from rotation_service.core.errors import BootstrapConflictError, UpstreamUnavailableError
from rotation_service.models.domain import AssignmentKind, GenerationMode
from rotation_service.models.period import Period
from rotation_service.repositories.history_repository import HistoryRepository
from rotation_service.schemas import (
    ErrorResponse,
    GenerationRequest,
    PERIOD_PATTERN,
    PeriodResponse,
    SummaryResponse,
)
from rotation_service.services.generation_service import GenerationService

router = APIRouter(prefix="/api/v1", tags=["Assignments"])

UPSTREAM_ERROR = {503: {"model": ErrorResponse, "description": "Roster or store unavailable"}}


def _period_or_422(period: Optional[str]) -> Optional[Period]:
    if period is None:
        return None
    try:
        return Period.parse(period)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


# ── Generation ──

@router.post(
    "/assignments/{kind}/initial",
    status_code=201,
    response_model=SummaryResponse,
    responses={
        409: {"model": ErrorResponse, "description": "Kind already bootstrapped"},
        **UPSTREAM_ERROR,
    },
)
def run_initial_generation(
    kind: AssignmentKind,
    payload: Optional[GenerationRequest] = None,
    service: GenerationService = Depends(get_generation_service),
):
    """Bootstrap assignments for a kind. Refused once any assignment exists."""
    try:
        return service.run_initial_generation(kind, payload.target() if payload else None)
    except BootstrapConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post(
    "/assignments/{kind}/rotate",
    response_model=SummaryResponse,
    responses=UPSTREAM_ERROR,
)
def run_rotation_generation(
    kind: AssignmentKind,
    payload: Optional[GenerationRequest] = None,
    service: GenerationService = Depends(get_generation_service),
):
    """Generate the current (or given) period's assignments. Idempotent."""
    try:
        return service.run_rotation_generation(kind, payload.target() if payload else None)
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/assignments/{kind}/preview", responses=UPSTREAM_ERROR)
def preview_generation(
    kind: AssignmentKind,
    mode: GenerationMode = Query(default=GenerationMode.ROTATION),
    period: Optional[str] = Query(default=None, pattern=PERIOD_PATTERN),
    service: GenerationService = Depends(get_generation_service),
):
    """Dry run — show the pairs a generation would write, without writing."""
    try:
        return service.preview(kind, mode, _period_or_422(period))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


# ── Queries ──

@router.get("/assignments/{kind}", responses=UPSTREAM_ERROR)
def list_assignments(
    kind: AssignmentKind,
    period: Optional[str] = Query(default=None, pattern=PERIOD_PATTERN),
    service: GenerationService = Depends(get_generation_service),
):
    """Stored assignments for a period, with per-committee-member load."""
    try:
        return service.list_assignments(kind, _period_or_422(period))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/periods/current", response_model=PeriodResponse)
def current_period():
    """The period rotation targets by default."""
    period = Period.current()
    return {
        "period": period.key,
        "start": period.start.isoformat(),
        "end": period.end.isoformat(),
        "previous": period.previous().key,
        "next": period.next().key,
    }


@router.get("/generation/history")
def get_generation_history(
    kind: Optional[AssignmentKind] = None,
    event_type: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1, description="Max results"),
    history_repo: HistoryRepository = Depends(get_history_repo),
):
    """Audit log of generation runs."""
    return history_repo.get_all(
        kind=kind.value if kind else None,
        event_type=event_type,
        limit=limit,
    )
