# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Interfaces for the roster provider and the assignment store.
Both are external collaborators; the engine only talks to these methods.
"""

from abc import ABC, abstractmethod

from rotation_service.models.domain import (
    Assignment,
    AssignmentKind,
    Claim,
    CommitteeMember,
    InsertResult,
    Member,
    Pair,
)
from rotation_service.models.period import Period


class RosterProvider(ABC):
    """Read-only view of the chapter roster."""

    @abstractmethod
    def list_active_members(self, kind: AssignmentKind) -> list[Member]:
        """Members eligible for `kind`, in a stable order."""

    @abstractmethod
    def list_active_committee_members(self, kind: AssignmentKind) -> list[CommitteeMember]:
        """Committee members who can receive `kind` assignments."""

    @abstractmethod
    def list_active_claims(self) -> list[Claim]:
        """All standing claims."""


class AssignmentStore(ABC):
    """Durable (member, period, kind) -> committee member mapping."""

    @abstractmethod
    def existing_assignments(self, period: Period, kind: AssignmentKind) -> list[Assignment]:
        """Assignments already stored for the period."""

    def prior_period_assignments(self, period: Period, kind: AssignmentKind) -> list[Assignment]:
        """Assignments of the period immediately before `period`."""
        return self.existing_assignments(period.previous(), kind)

    @abstractmethod
    def insert_assignments(
        self, kind: AssignmentKind, period: Period, pairs: list[Pair]
    ) -> InsertResult:
        """
        Insert-if-absent for every pair. A pair whose member already holds
        an assignment for (period, kind) is reported in `conflicts`.
        """

    @abstractmethod
    def any_assignment_exists(self, kind: AssignmentKind) -> bool:
        """True if at least one assignment of `kind` exists for any period."""
