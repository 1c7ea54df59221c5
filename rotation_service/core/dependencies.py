# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
In-memory stores by default; SQL and HTTP adapters when configured.
"""

from rotation_service.core.config import settings
from rotation_service.core.database import build_engine
from rotation_service.repositories.assignment_repository import AssignmentRepository
from rotation_service.repositories.base import AssignmentStore, RosterProvider
from rotation_service.repositories.history_repository import HistoryRepository
from rotation_service.repositories.roster_client import HttpRosterClient
from rotation_service.repositories.roster_repository import RosterRepository
from rotation_service.repositories.sql_assignment_repository import SqlAssignmentRepository
from rotation_service.services.generation_service import GenerationService


def _build_roster() -> RosterProvider:
    if settings.ROSTER_SERVICE_URL:
        return HttpRosterClient()
    return RosterRepository()


def _build_assignment_store() -> AssignmentStore:
    if settings.DATABASE_URL:
        return SqlAssignmentRepository(build_engine())
    return AssignmentRepository()


# ── Singleton repository instances ──
_roster = _build_roster()
_assignment_store = _build_assignment_store()
_history_repo = HistoryRepository()

# ── Service instances (with injected dependencies) ──
_generation_service = GenerationService(
    roster=_roster,
    assignments=_assignment_store,
    history_repo=_history_repo,
)


# ── FastAPI dependency functions ──
def get_generation_service() -> GenerationService:
    return _generation_service


def get_roster() -> RosterProvider:
    return _roster


def get_assignment_store() -> AssignmentStore:
    return _assignment_store


def get_history_repo() -> HistoryRepository:
    return _history_repo
