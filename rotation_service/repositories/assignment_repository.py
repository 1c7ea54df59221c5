# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Assignment data access (in-memory).
Append-only; uniqueness on (member, period, kind) is enforced under a lock.
NO business rules here — pure storage.
"""

import threading
import uuid
from datetime import datetime, timezone

from rotation_service.models.domain import Assignment, AssignmentKind, InsertResult, Pair
from rotation_service.models.period import Period
from rotation_service.repositories.base import AssignmentStore


class AssignmentRepository(AssignmentStore):
    """In-memory assignment storage."""

    def __init__(self) -> None:
        self._store: dict[tuple[str, str, str], Assignment] = {}
        self._lock = threading.Lock()

    # ── Read ──

    def existing_assignments(self, period: Period, kind: AssignmentKind) -> list[Assignment]:
        return [
            a for a in self.get_all()
            if a.period == period.key and a.kind == kind
        ]

    def any_assignment_exists(self, kind: AssignmentKind) -> bool:
        return any(a.kind == kind for a in self.get_all())

    def get_all(self) -> list[Assignment]:
        with self._lock:
            return list(self._store.values())

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def insert_assignments(
        self, kind: AssignmentKind, period: Period, pairs: list[Pair]
    ) -> InsertResult:
        result = InsertResult()
        now = datetime.now(timezone.utc)
        with self._lock:
            for pair in pairs:
                key = (pair.member_id, period.key, kind.value)
                if key in self._store:
                    result.conflicts.append(pair.member_id)
                    continue
                self._store[key] = Assignment(
                    id=str(uuid.uuid4()),
                    member_id=pair.member_id,
                    committee_member_id=pair.committee_member_id,
                    period=period.key,
                    kind=kind,
                    created_at=now,
                )
                result.inserted_count += 1
        return result

    # ── Bulk / internal ──

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
