# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Data-access layer for assignments backed by a SQL database.
Uniqueness on (member_id, period, kind) is a table constraint; inserts use
ON CONFLICT DO NOTHING so concurrent runs cannot duplicate rows.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from rotation_service.core.errors import UpstreamUnavailableError
from rotation_service.core.logging import get_logger
from rotation_service.models.domain import Assignment, AssignmentKind, InsertResult, Pair
from rotation_service.models.period import Period
from rotation_service.repositories.base import AssignmentStore

logger = get_logger(__name__)

ASSIGNMENT_COLS = "id, member_id, committee_member_id, period, kind, created_at"

SCHEMA_DDL = (
    """
    CREATE TABLE IF NOT EXISTS assignments (
        id VARCHAR(36) PRIMARY KEY,
        member_id VARCHAR(255) NOT NULL,
        committee_member_id VARCHAR(255) NOT NULL,
        period VARCHAR(7) NOT NULL,
        kind VARCHAR(32) NOT NULL,
        created_at VARCHAR(40) NOT NULL,
        CONSTRAINT uq_assignment_member_period_kind UNIQUE (member_id, period, kind)
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_assignments_period_kind ON assignments (period, kind)",
)


def _row_to_assignment(row) -> Assignment:
    return Assignment(
        id=str(row[0]),
        member_id=row[1],
        committee_member_id=row[2],
        period=row[3],
        kind=row[4],
        created_at=datetime.fromisoformat(row[5]),
    )


class SqlAssignmentRepository(AssignmentStore):
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Schema ─────────────────────────────────────────────────────────

    def ensure_schema(self) -> None:
        try:
            with self._engine.begin() as conn:
                for ddl in SCHEMA_DDL:
                    conn.execute(text(ddl))
        except SQLAlchemyError as exc:
            raise UpstreamUnavailableError("assignment store", str(exc)) from exc
        logger.info("Assignment schema verified")

    def verify_connection(self) -> None:
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    # ── Read ───────────────────────────────────────────────────────────

    def existing_assignments(self, period: Period, kind: AssignmentKind) -> List[Assignment]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(
                    text(f"""
                        SELECT {ASSIGNMENT_COLS} FROM assignments
                        WHERE period = :period AND kind = :kind
                        ORDER BY created_at, member_id
                    """),
                    {"period": period.key, "kind": kind.value},
                ).fetchall()
        except SQLAlchemyError as exc:
            raise UpstreamUnavailableError("assignment store", str(exc)) from exc
        return [_row_to_assignment(r) for r in rows]

    def any_assignment_exists(self, kind: AssignmentKind) -> bool:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    text("SELECT 1 FROM assignments WHERE kind = :kind LIMIT 1"),
                    {"kind": kind.value},
                ).fetchone()
        except SQLAlchemyError as exc:
            raise UpstreamUnavailableError("assignment store", str(exc)) from exc
        return row is not None

    def count(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM assignments")).scalar() or 0

    # ── Write ──────────────────────────────────────────────────────────

    def insert_assignments(
        self, kind: AssignmentKind, period: Period, pairs: List[Pair]
    ) -> InsertResult:
        result = InsertResult()
        if not pairs:
            return result
        created_at = datetime.now(timezone.utc).isoformat()
        try:
            with self._engine.begin() as conn:
                for pair in pairs:
                    params: Dict[str, Any] = {
                        "id": str(uuid.uuid4()),
                        "member_id": pair.member_id,
                        "committee_member_id": pair.committee_member_id,
                        "period": period.key,
                        "kind": kind.value,
                        "created_at": created_at,
                    }
                    inserted = conn.execute(
                        text(f"""
                            INSERT INTO assignments ({ASSIGNMENT_COLS})
                            VALUES (:id, :member_id, :committee_member_id,
                                    :period, :kind, :created_at)
                            ON CONFLICT (member_id, period, kind) DO NOTHING
                        """),
                        params,
                    ).rowcount
                    if inserted:
                        result.inserted_count += 1
                    else:
                        result.conflicts.append(pair.member_id)
        except SQLAlchemyError as exc:
            raise UpstreamUnavailableError("assignment store", str(exc)) from exc
        return result
