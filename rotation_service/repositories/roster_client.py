# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP client for the roster owned by the membership (CRUD) backend.
Any transport failure or non-2xx answer is surfaced as retryable.
"""
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from rotation_service.core.config import settings
from rotation_service.core.errors import UpstreamUnavailableError
from rotation_service.core.logging import get_logger
from rotation_service.models.domain import AssignmentKind, Claim, CommitteeMember, Member
from rotation_service.repositories.base import RosterProvider

logger = get_logger(__name__)


class HttpRosterClient(RosterProvider):
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self._base_url = (base_url or settings.ROSTER_SERVICE_URL).rstrip("/")
        self._timeout = timeout or settings.ROSTER_TIMEOUT

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.get(f"{self._base_url}{path}", params=params)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPError as exc:
            logger.warning("Roster service unreachable: path=%s error=%s", path, exc)
            raise UpstreamUnavailableError("roster provider", str(exc)) from exc
        except ValueError as exc:
            raise UpstreamUnavailableError("roster provider", f"invalid JSON: {exc}") from exc

    def list_active_members(self, kind: AssignmentKind) -> List[Member]:
        rows = self._get("/api/v1/members", {"active": "true", "kind": kind.value})
        return self._parse(Member, rows)

    def list_active_committee_members(self, kind: AssignmentKind) -> List[CommitteeMember]:
        rows = self._get("/api/v1/committee-members", {"active": "true", "kind": kind.value})
        return self._parse(CommitteeMember, rows)

    def list_active_claims(self) -> List[Claim]:
        return self._parse(Claim, self._get("/api/v1/claims", {"active": "true"}))

    @staticmethod
    def _parse(model, rows: List[Dict[str, Any]]) -> list:
        try:
            return [model.model_validate(r) for r in rows]
        except ValidationError as exc:
            raise UpstreamUnavailableError("roster provider", f"malformed payload: {exc}") from exc
