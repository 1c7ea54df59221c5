# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Generation run history.
Bounded audit log of every generation attempt, oldest entries dropped first.
"""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Optional

from rotation_service.core.config import settings


class HistoryRepository:
    """In-memory generation audit log."""

    def __init__(self, max_size: Optional[int] = None) -> None:
        self._events: deque[dict[str, Any]] = deque(
            maxlen=max_size or settings.MAX_HISTORY_SIZE
        )

    # ── Read ──

    def get_all(
        self,
        kind: Optional[str] = None,
        event_type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Events in recording order, newest last, filtered by kind and type."""
        matches = [
            e for e in self._events
            if (kind is None or e["kind"] == kind)
            and (event_type is None or e["event_type"] == event_type)
        ]
        return matches[-(limit or settings.DEFAULT_HISTORY_LIMIT):]

    def latest(self, kind: str, event_type: Optional[str] = None) -> Optional[dict[str, Any]]:
        matches = self.get_all(kind=kind, event_type=event_type, limit=1)
        return matches[0] if matches else None

    def count(self) -> int:
        return len(self._events)

    # ── Write ──

    def record_event(
        self, event_type: str, kind: str, period: str, details: dict[str, Any]
    ) -> dict[str, Any]:
        event = {
            "event_id": str(uuid.uuid4()),
            "event_type": event_type,
            "kind": kind,
            "period": period,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": details,
        }
        self._events.append(event)
        return event

    def clear(self) -> None:
        self._events.clear()
