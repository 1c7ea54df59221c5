# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rotation_service.core.config import settings


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class AssignmentKind(str, Enum):
    PRAYER = "prayer"
    COMMUNICATION = "communication"


class Role(str, Enum):
    """Committee roles. Only some of them take assignments."""
    DEVELOPER = "developer"
    OVERSEER = "overseer"
    PRESIDENT = "president"
    YOUTH_OUTREACH = "youth_outreach"
    COMMITTEE_MEMBER = "committee_member"


_BOTH_KINDS = frozenset(AssignmentKind)

# Every role must be listed; an unlisted role is a startup error, never a
# silent pass through the eligibility check.
ASSIGNABLE_KINDS: dict[Role, frozenset[AssignmentKind]] = {
    Role.DEVELOPER: frozenset(),
    Role.OVERSEER: frozenset(),
    Role.PRESIDENT: _BOTH_KINDS,
    Role.YOUTH_OUTREACH: _BOTH_KINDS,
    Role.COMMITTEE_MEMBER: _BOTH_KINDS,
}

_unmapped_roles = set(Role) - set(ASSIGNABLE_KINDS)
if _unmapped_roles:
    raise RuntimeError(
        f"Roles without eligibility rules: {sorted(r.value for r in _unmapped_roles)}"
    )


def role_takes(role: Role, kind: AssignmentKind) -> bool:
    return kind in ASSIGNABLE_KINDS[role]


class Member(BaseModel):
    """A chapter member who receives prayer support and outreach."""
    id: str = Field(..., min_length=1)
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    gender: Gender
    is_active: bool = True
    is_graduated: bool = False
    is_committee_member: bool = False
    joined_at: Optional[date] = None

    def is_eligible(self, kind: AssignmentKind) -> bool:
        if not self.is_active or self.is_graduated:
            return False
        # Committee members are not contacted by their own committee.
        if kind == AssignmentKind.COMMUNICATION and self.is_committee_member:
            return False
        return True


class CommitteeMember(BaseModel):
    """A committee member who can be the target of assignments."""
    id: str = Field(..., min_length=1)
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    gender: Gender
    role: Role = Role.COMMITTEE_MEMBER
    is_active: bool = True

    @property
    def is_sandbox_account(self) -> bool:
        domain = settings.EXCLUDED_EMAIL_DOMAIN.lower()
        return bool(domain) and domain in self.email.lower()

    def is_assignable(self, kind: AssignmentKind) -> bool:
        return (
            self.is_active
            and not self.is_sandbox_account
            and role_takes(self.role, kind)
        )


class Claim(BaseModel):
    """Standing request by a committee member to keep a member across rotations."""
    model_config = ConfigDict(frozen=True)

    member_id: str
    committee_member_id: str
    kind: Optional[AssignmentKind] = None

    def applies_to(self, kind: AssignmentKind) -> bool:
        return self.kind is None or self.kind == kind


class Assignment(BaseModel):
    """One stored (member, period, kind) -> committee member record."""
    model_config = ConfigDict(frozen=True)

    id: str
    member_id: str
    committee_member_id: str
    period: str
    kind: AssignmentKind
    created_at: datetime


class Pair(BaseModel):
    model_config = ConfigDict(frozen=True)

    member_id: str
    committee_member_id: str


class InsertResult(BaseModel):
    inserted_count: int = 0
    conflicts: list[str] = Field(default_factory=list)


class ExceptionReason(str, Enum):
    UNMATCHABLE = "unmatchable"
    CLAIM_GENDER_MISMATCH = "claim_gender_mismatch"
    CLAIM_VOID = "claim_void"
    CLAIM_CONFLICT = "claim_conflict"


class ExceptionRecord(BaseModel):
    """A non-fatal problem found while matching one member."""
    member_id: str
    reason: ExceptionReason
    detail: str
    committee_member_id: Optional[str] = None


class GenerationMode(str, Enum):
    INITIAL = "initial"
    ROTATION = "rotation"


class Summary(BaseModel):
    kind: AssignmentKind
    period: str
    mode: GenerationMode
    created_count: int = 0
    skipped_count: int = 0
    exceptions: list[ExceptionRecord] = Field(default_factory=list)
