# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Rotation scheduling — decides which members still need an
assignment for a period and asks the matcher to pair only those.
Reads everything fresh on every call; keeps no state between calls.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from rotation_service.core.logging import get_logger
from rotation_service.models.domain import (
    AssignmentKind,
    ExceptionRecord,
    GenerationMode,
    Pair,
)
from rotation_service.models.period import Period
from rotation_service.repositories.base import AssignmentStore, RosterProvider
from rotation_service.services.matching import match_members

logger = get_logger(__name__)


class GenerationPlan(BaseModel):
    """What a generation run would write, before any write happens."""
    kind: AssignmentKind
    period: str
    mode: GenerationMode
    eligible_count: int = 0
    covered_count: int = 0
    pairs: list[Pair] = Field(default_factory=list)
    exceptions: list[ExceptionRecord] = Field(default_factory=list)


class RotationScheduler:
    """Resolves the target period and the uncovered gap within it."""

    def __init__(self, roster: RosterProvider, assignments: AssignmentStore) -> None:
        self._roster = roster
        self._assignments = assignments

    @staticmethod
    def target_period(
        override: Optional[Period] = None,
        now: Optional[datetime] = None,
    ) -> Period:
        return override or Period.current(now)

    def plan(
        self,
        kind: AssignmentKind,
        period: Period,
        mode: GenerationMode,
    ) -> GenerationPlan:
        members = [m for m in self._roster.list_active_members(kind) if m.is_eligible(kind)]
        committee = [
            c for c in self._roster.list_active_committee_members(kind)
            if c.is_assignable(kind)
        ]
        claims = [c for c in self._roster.list_active_claims() if c.applies_to(kind)]

        existing = self._assignments.existing_assignments(period, kind)
        covered = {a.member_id for a in existing}
        uncovered = [m for m in members if m.id not in covered]

        current_load: dict[str, int] = {}
        for a in existing:
            current_load[a.committee_member_id] = current_load.get(a.committee_member_id, 0) + 1

        previous: dict[str, str] = {}
        if mode == GenerationMode.ROTATION and uncovered:
            previous = {
                a.member_id: a.committee_member_id
                for a in self._assignments.prior_period_assignments(period, kind)
            }
            if not previous:
                logger.info(
                    "No prior-period assignments: kind=%s, period=%s",
                    kind.value, period.key,
                )

        match = match_members(
            uncovered,
            committee,
            claims=claims,
            previous=previous,
            current_load=current_load,
        )
        logger.info(
            "Plan computed: kind=%s, period=%s, mode=%s, eligible=%d, covered=%d, pairs=%d",
            kind.value, period.key, mode.value,
            len(members), len(members) - len(uncovered), len(match.pairs),
        )
        return GenerationPlan(
            kind=kind,
            period=period.key,
            mode=mode,
            eligible_count=len(members),
            covered_count=len(members) - len(uncovered),
            pairs=match.pairs,
            exceptions=match.exceptions,
        )
