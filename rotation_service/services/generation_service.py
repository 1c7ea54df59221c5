# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Assignment generation — entry point for manual and scheduled runs.
Coordinates roster -> scheduler -> matcher -> store, with metrics and history.
"""

import time
from contextlib import contextmanager
from typing import Any, Optional

from rotation_service.core.errors import BootstrapConflictError, UpstreamUnavailableError
from rotation_service.core.logging import get_logger
from rotation_service.metrics import (
    ASSIGNMENTS_CREATED,
    ASSIGNMENTS_SKIPPED,
    GENERATION_DURATION,
    GENERATION_EXCEPTIONS,
    GENERATION_RUNS,
)
from rotation_service.models.domain import AssignmentKind, GenerationMode, Summary
from rotation_service.models.period import Period
from rotation_service.repositories.base import AssignmentStore, RosterProvider
from rotation_service.repositories.history_repository import HistoryRepository
from rotation_service.services.matching import load_by_committee_member
from rotation_service.services.scheduler import GenerationPlan, RotationScheduler

logger = get_logger(__name__)


class GenerationService:
    """Business logic for initial and rotation generation."""

    def __init__(
        self,
        roster: RosterProvider,
        assignments: AssignmentStore,
        history_repo: HistoryRepository,
    ) -> None:
        self._assignments = assignments
        self._history = history_repo
        self._scheduler = RotationScheduler(roster, assignments)

    # ── Commands ──

    def run_initial_generation(
        self,
        kind: AssignmentKind,
        period: Optional[Period] = None,
    ) -> Summary:
        """
        Bootstrap assignments for a kind. Raises BootstrapConflictError,
        without writing anything, if the kind already has assignments.
        """
        target = self._scheduler.target_period(period)
        with self._timed(kind, GenerationMode.INITIAL):
            if self._assignments.any_assignment_exists(kind):
                GENERATION_RUNS.labels(
                    kind=kind.value, mode=GenerationMode.INITIAL.value, outcome="conflict"
                ).inc()
                self._history.record_event(
                    "bootstrap_rejected", kind.value, target.key, {}
                )
                logger.warning("Initial generation rejected: kind=%s already bootstrapped", kind.value)
                raise BootstrapConflictError(kind.value)
            return self._generate(kind, target, GenerationMode.INITIAL)

    def run_rotation_generation(
        self,
        kind: AssignmentKind,
        period_override: Optional[Period] = None,
    ) -> Summary:
        """Fill the gap for the current (or given) period. Safe to repeat."""
        target = self._scheduler.target_period(period_override)
        with self._timed(kind, GenerationMode.ROTATION):
            return self._generate(kind, target, GenerationMode.ROTATION)

    # ── Queries ──

    def preview(
        self,
        kind: AssignmentKind,
        mode: GenerationMode,
        period: Optional[Period] = None,
    ) -> dict[str, Any]:
        """Dry run: the plan a generation would execute, with no writes."""
        target = self._scheduler.target_period(period)
        blocked = (
            mode == GenerationMode.INITIAL
            and self._assignments.any_assignment_exists(kind)
        )
        plan = self._scheduler.plan(kind, target, mode)
        return {
            "would_succeed": not blocked,
            "reason": "already bootstrapped" if blocked else None,
            "plan": plan.model_dump(mode="json"),
            "load": load_by_committee_member(plan.pairs),
        }

    def list_assignments(self, kind: AssignmentKind, period: Optional[Period] = None) -> dict[str, Any]:
        target = self._scheduler.target_period(period)
        assignments = self._assignments.existing_assignments(target, kind)
        load: dict[str, int] = {}
        for a in assignments:
            load[a.committee_member_id] = load.get(a.committee_member_id, 0) + 1
        return {
            "kind": kind.value,
            "period": target.key,
            "total": len(assignments),
            "load": load,
            "assignments": [a.model_dump(mode="json") for a in assignments],
        }

    # ── Internal ──

    def _generate(self, kind: AssignmentKind, period: Period, mode: GenerationMode) -> Summary:
        plan = self._scheduler.plan(kind, period, mode)
        result = self._assignments.insert_assignments(kind, period, plan.pairs)

        summary = Summary(
            kind=kind,
            period=period.key,
            mode=mode,
            created_count=result.inserted_count,
            skipped_count=plan.covered_count + len(result.conflicts),
            exceptions=plan.exceptions,
        )
        self._record(plan, summary)
        return summary

    def _record(self, plan: GenerationPlan, summary: Summary) -> None:
        kind = summary.kind.value
        GENERATION_RUNS.labels(kind=kind, mode=summary.mode.value, outcome="success").inc()
        ASSIGNMENTS_CREATED.labels(kind=kind).inc(summary.created_count)
        ASSIGNMENTS_SKIPPED.labels(kind=kind).inc(summary.skipped_count)
        for exc in summary.exceptions:
            GENERATION_EXCEPTIONS.labels(kind=kind, reason=exc.reason.value).inc()
            logger.warning(
                "Generation exception: kind=%s, member=%s, reason=%s, detail=%s",
                kind, exc.member_id, exc.reason.value, exc.detail,
            )

        self._history.record_event(
            f"{summary.mode.value}_generation",
            kind,
            summary.period,
            {
                "eligible": plan.eligible_count,
                "created": summary.created_count,
                "skipped": summary.skipped_count,
                "exceptions": len(summary.exceptions),
            },
        )
        logger.info(
            "Generation complete: kind=%s, period=%s, mode=%s, created=%d, skipped=%d, exceptions=%d",
            kind, summary.period, summary.mode.value,
            summary.created_count, summary.skipped_count, len(summary.exceptions),
        )

    @contextmanager
    def _timed(self, kind: AssignmentKind, mode: GenerationMode):
        """Observe run duration; count upstream failures as failed runs."""
        start = time.time()
        try:
            yield
        except UpstreamUnavailableError as exc:
            GENERATION_RUNS.labels(
                kind=kind.value, mode=mode.value, outcome="upstream_error"
            ).inc()
            logger.error(
                "Generation aborted: kind=%s, mode=%s, error=%s",
                kind.value, mode.value, exc,
            )
            raise
        finally:
            GENERATION_DURATION.labels(kind=kind.value, mode=mode.value).observe(
                time.time() - start
            )
