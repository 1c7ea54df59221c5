# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Roster data access (in-memory).
Holds members, committee members and claims as pushed in by the CRUD layer.
"""

from rotation_service.models.domain import AssignmentKind, Claim, CommitteeMember, Member
from rotation_service.repositories.base import RosterProvider


class RosterRepository(RosterProvider):
    """In-memory roster storage. Insertion order is preserved."""

    def __init__(self) -> None:
        self._members: dict[str, Member] = {}
        self._committee: dict[str, CommitteeMember] = {}
        self._claims: list[Claim] = []

    # ── Read ──

    def list_active_members(self, kind: AssignmentKind) -> list[Member]:
        return [m for m in self._members.values() if m.is_eligible(kind)]

    def list_active_committee_members(self, kind: AssignmentKind) -> list[CommitteeMember]:
        return [c for c in self._committee.values() if c.is_assignable(kind)]

    def list_active_claims(self) -> list[Claim]:
        return list(self._claims)

    def count_members(self) -> int:
        return len(self._members)

    def count_committee(self) -> int:
        return len(self._committee)

    # ── Write ──

    def save_member(self, member: Member) -> None:
        self._members[member.id] = member

    def save_committee_member(self, committee_member: CommitteeMember) -> None:
        self._committee[committee_member.id] = committee_member

    def add_claim(self, claim: Claim) -> None:
        if claim not in self._claims:
            self._claims.append(claim)

    def remove_claim(self, claim: Claim) -> bool:
        if claim in self._claims:
            self._claims.remove(claim)
            return True
        return False

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._members.clear()
        self._committee.clear()
        self._claims.clear()

    # ── Seed ──

    def seed_defaults(self) -> None:
        """Load a small demo roster so the service is usable immediately."""
        committee = [
            CommitteeMember(id="cm-anna", first_name="Anna", last_name="Kim",
                            email="anna@chapter.org", gender="female"),
            CommitteeMember(id="cm-grace", first_name="Grace", last_name="Park",
                            email="grace@chapter.org", gender="female",
                            role="president"),
            CommitteeMember(id="cm-john", first_name="John", last_name="Lee",
                            email="john@chapter.org", gender="male",
                            role="youth_outreach"),
            CommitteeMember(id="cm-dev", first_name="Dev", last_name="Account",
                            email="dev@example.com", gender="male",
                            role="developer"),
        ]
        members = [
            Member(id="m-ruth", first_name="Ruth", last_name="Cho", gender="female"),
            Member(id="m-esther", first_name="Esther", last_name="Han", gender="female"),
            Member(id="m-lydia", first_name="Lydia", last_name="Jung", gender="female"),
            Member(id="m-mary", first_name="Mary", last_name="Yoon", gender="female"),
            Member(id="m-peter", first_name="Peter", last_name="Shin", gender="male"),
            Member(id="m-paul", first_name="Paul", last_name="Lim", gender="male"),
            Member(id="m-james", first_name="James", last_name="Oh", gender="male",
                   is_graduated=True),
        ]
        for cm in committee:
            self.save_committee_member(cm)
        for member in members:
            self.save_member(member)
