# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the Rotation Service HTTP surface.
In-memory roster and assignment store, reset before every test.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from main import app
from rotation_service.core.config import settings
from rotation_service.core.dependencies import (
    get_assignment_store,
    get_generation_service,
    get_history_repo,
    get_roster,
)
from rotation_service.core.errors import UpstreamUnavailableError
from rotation_service.models.domain import Claim, CommitteeMember, Member
from rotation_service.models.period import Period

client = TestClient(app)

BASE = "/api/v1/assignments"


# ============================================
# Fixtures
# ============================================
@pytest.fixture(autouse=True)
def reset_state():
    """Reset in-memory state, then load a 6F/4M roster with three committee members."""
    roster = get_roster()
    roster.clear()
    get_assignment_store().clear()
    get_history_repo().clear()
    for i in range(1, 7):
        roster.save_member(Member(id=f"f{i}", gender="female"))
    for i in range(1, 5):
        roster.save_member(Member(id=f"m{i}", gender="male"))
    roster.save_committee_member(
        CommitteeMember(id="cf-a", gender="female", email="a@chapter.org"))
    roster.save_committee_member(
        CommitteeMember(id="cf-b", gender="female", email="b@chapter.org", role="president"))
    roster.save_committee_member(
        CommitteeMember(id="cm-c", gender="male", email="c@chapter.org", role="youth_outreach"))
    yield


# ============================================
# Health & Metrics
# ============================================
class TestHealth:
    def test_health_returns_ok(self):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == settings.SERVICE_NAME
        assert data["version"] == settings.SERVICE_VERSION

    def test_health_counts_generation_runs(self):
        client.post(f"{BASE}/prayer/rotate", json={"period": "2026-03"})
        assert client.get("/health").json()["generation_runs"] == 1

    def test_readiness_reports_memory_store(self):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["store"] == "memory"

    def test_metrics_exposes_generation_counters(self):
        client.post(f"{BASE}/prayer/rotate", json={"period": "2026-03"})
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "rotation_generation_runs_total" in response.text
        assert "rotation_assignments_created_total" in response.text

    def test_request_id_is_propagated(self):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_is_generated(self):
        response = client.get("/health")
        assert response.headers.get("X-Request-ID")


# ============================================
# Initial generation
# ============================================
class TestInitialEndpoint:
    def test_initial_creates_assignments(self):
        response = client.post(f"{BASE}/prayer/initial", json={"period": "2026-03"})
        assert response.status_code == 201
        data = response.json()
        assert data["kind"] == "prayer"
        assert data["period"] == "2026-03"
        assert data["mode"] == "initial"
        assert data["created_count"] == 10
        assert data["skipped_count"] == 0
        assert data["exceptions"] == []

    def test_second_initial_is_conflict(self):
        client.post(f"{BASE}/prayer/initial", json={"period": "2026-03"})
        response = client.post(f"{BASE}/prayer/initial", json={"period": "2026-04"})
        assert response.status_code == 409
        assert "already exist" in response.json()["detail"]
        assert get_assignment_store().count() == 10

    def test_initial_without_body_uses_current_period(self):
        response = client.post(f"{BASE}/communication/initial")
        assert response.status_code == 201
        assert response.json()["period"] == Period.current().key

    def test_unknown_kind_is_rejected(self):
        response = client.post(f"{BASE}/fasting/initial")
        assert response.status_code == 422

    @pytest.mark.parametrize("bad", ["2026-13", "2026-3", "march"])
    def test_malformed_period_is_rejected(self, bad):
        response = client.post(f"{BASE}/prayer/initial", json={"period": bad})
        assert response.status_code == 422
        assert get_assignment_store().count() == 0


# ============================================
# Rotation generation
# ============================================
class TestRotateEndpoint:
    def test_rotate_is_idempotent(self):
        first = client.post(f"{BASE}/prayer/rotate", json={"period": "2026-03"}).json()
        second = client.post(f"{BASE}/prayer/rotate", json={"period": "2026-03"}).json()
        assert (first["created_count"], first["skipped_count"]) == (10, 0)
        assert (second["created_count"], second["skipped_count"]) == (0, 10)

    def test_rotate_without_body(self):
        response = client.post(f"{BASE}/prayer/rotate")
        assert response.status_code == 200
        assert response.json()["mode"] == "rotation"

    def test_rotate_reports_exceptions(self):
        get_roster().add_claim(Claim(member_id="f1", committee_member_id="cm-c"))
        data = client.post(f"{BASE}/prayer/rotate", json={"period": "2026-03"}).json()
        assert data["created_count"] == 10
        assert data["exceptions"][0]["reason"] == "claim_gender_mismatch"
        assert data["exceptions"][0]["member_id"] == "f1"

    def test_upstream_failure_is_503(self):
        error = UpstreamUnavailableError("roster provider", "connection refused")
        with patch.object(get_generation_service(), "run_rotation_generation", side_effect=error):
            response = client.post(f"{BASE}/prayer/rotate")
        assert response.status_code == 503
        assert "roster provider unavailable" in response.json()["detail"]


# ============================================
# Preview & listing
# ============================================
class TestQueries:
    def test_preview_does_not_write(self):
        response = client.get(f"{BASE}/prayer/preview", params={"mode": "initial", "period": "2026-03"})
        assert response.status_code == 200
        data = response.json()
        assert data["would_succeed"] is True
        assert data["load"] == {"cf-a": 3, "cf-b": 3, "cm-c": 4}
        assert get_assignment_store().count() == 0

    def test_preview_after_bootstrap(self):
        client.post(f"{BASE}/prayer/initial", json={"period": "2026-03"})
        data = client.get(f"{BASE}/prayer/preview", params={"mode": "initial"}).json()
        assert data["would_succeed"] is False

    def test_preview_rejects_bad_period(self):
        response = client.get(f"{BASE}/prayer/preview", params={"period": "2026-13"})
        assert response.status_code == 422

    def test_list_assignments(self):
        client.post(f"{BASE}/prayer/rotate", json={"period": "2026-03"})
        response = client.get(f"{BASE}/prayer", params={"period": "2026-03"})
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 10
        assert data["load"]["cm-c"] == 4
        assert {a["member_id"] for a in data["assignments"]} == {
            "f1", "f2", "f3", "f4", "f5", "f6", "m1", "m2", "m3", "m4",
        }

    def test_list_other_kind_is_empty(self):
        client.post(f"{BASE}/prayer/rotate", json={"period": "2026-03"})
        data = client.get(f"{BASE}/communication", params={"period": "2026-03"}).json()
        assert data["total"] == 0

    def test_current_period(self):
        data = client.get("/api/v1/periods/current").json()
        current = Period.current()
        assert data["period"] == current.key
        assert data["next"] == current.next().key
        assert data["previous"] == current.previous().key


# ============================================
# History
# ============================================
class TestHistory:
    def test_history_records_runs_and_rejections(self):
        client.post(f"{BASE}/prayer/initial", json={"period": "2026-03"})
        client.post(f"{BASE}/prayer/initial", json={"period": "2026-03"})
        client.post(f"{BASE}/communication/rotate", json={"period": "2026-03"})
        events = client.get("/api/v1/generation/history").json()
        assert [e["event_type"] for e in events] == [
            "initial_generation", "bootstrap_rejected", "rotation_generation",
        ]

    def test_history_filters(self):
        client.post(f"{BASE}/prayer/rotate", json={"period": "2026-03"})
        client.post(f"{BASE}/communication/rotate", json={"period": "2026-03"})
        events = client.get("/api/v1/generation/history", params={"kind": "communication"}).json()
        assert len(events) == 1
        assert events[0]["kind"] == "communication"

    def test_history_limit(self):
        for period in ("2026-01", "2026-02", "2026-03"):
            client.post(f"{BASE}/prayer/rotate", json={"period": period})
        events = client.get("/api/v1/generation/history", params={"limit": 2}).json()
        assert [e["period"] for e in events] == ["2026-02", "2026-03"]


# ============================================
# Unhandled errors
# ============================================
class TestErrorHandling:
    def test_unhandled_error_returns_500_json(self):
        lenient = TestClient(app, raise_server_exceptions=False)
        with patch.object(get_generation_service(), "list_assignments", side_effect=RuntimeError("boom")):
            response = lenient.get(f"{BASE}/prayer")
        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert response.json()["detail"] == "boom"

    def test_error_responses_are_documented(self):
        paths = client.get("/openapi.json").json()["paths"]
        initial = paths["/api/v1/assignments/{kind}/initial"]["post"]["responses"]
        rotate = paths["/api/v1/assignments/{kind}/rotate"]["post"]["responses"]
        assert {"201", "409", "503"} <= set(initial)
        assert "503" in rotate
        assert initial["409"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
