# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports the store interfaces and implementations."""
from rotation_service.repositories.base import AssignmentStore, RosterProvider
from rotation_service.repositories.assignment_repository import AssignmentRepository
from rotation_service.repositories.history_repository import HistoryRepository
from rotation_service.repositories.roster_client import HttpRosterClient
from rotation_service.repositories.roster_repository import RosterRepository
from rotation_service.repositories.sql_assignment_repository import SqlAssignmentRepository

__all__ = [
    "AssignmentStore",
    "RosterProvider",
    "AssignmentRepository",
    "HistoryRepository",
    "HttpRosterClient",
    "RosterRepository",
    "SqlAssignmentRepository",
]
