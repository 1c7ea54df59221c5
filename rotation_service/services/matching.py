# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Matching logic — pure computation, no side effects.

Pairs members with committee members of the same gender:
claims first, then least-loaded committee member, ties by identifier.
"""

from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, Field

from rotation_service.models.domain import (
    Claim,
    CommitteeMember,
    ExceptionReason,
    ExceptionRecord,
    Gender,
    Member,
    Pair,
)


class MatchResult(BaseModel):
    pairs: list[Pair] = Field(default_factory=list)
    exceptions: list[ExceptionRecord] = Field(default_factory=list)

    def as_mapping(self) -> dict[str, str]:
        return {p.member_id: p.committee_member_id for p in self.pairs}


def _claim_table(
    claims: Iterable[Claim],
    member_ids: set[str],
) -> tuple[dict[str, Claim], list[ExceptionRecord]]:
    """First claim per member wins; later ones are reported and ignored."""
    table: dict[str, Claim] = {}
    conflicts: list[ExceptionRecord] = []
    for claim in claims:
        if claim.member_id not in member_ids:
            continue
        held = table.get(claim.member_id)
        if held is None:
            table[claim.member_id] = claim
        elif held.committee_member_id != claim.committee_member_id:
            conflicts.append(ExceptionRecord(
                member_id=claim.member_id,
                committee_member_id=claim.committee_member_id,
                reason=ExceptionReason.CLAIM_CONFLICT,
                detail=(
                    f"Member already claimed by '{held.committee_member_id}'; "
                    f"claim by '{claim.committee_member_id}' ignored"
                ),
            ))
    return table, conflicts


def _least_loaded(
    pool: list[CommitteeMember],
    load: dict[str, int],
    previous: Optional[str],
) -> CommitteeMember:
    """
    Least-loaded committee member of an id-sorted pool.

    Without a previous committee member, ties go to the lowest id. With one,
    ties are walked cyclically from the slot after it, so a full rotation
    shifts every member one committee member along (a -> b -> c -> a).
    """
    lowest = min(load[c.id] for c in pool)
    ids = [c.id for c in pool]
    start = ids.index(previous) + 1 if previous in ids else 0
    rotated = pool[start:] + pool[:start]
    return next(cm for cm in rotated if load[cm.id] == lowest)


def match_members(
    members: list[Member],
    committee: list[CommitteeMember],
    claims: Iterable[Claim] = (),
    previous: Optional[Mapping[str, str]] = None,
    current_load: Optional[Mapping[str, int]] = None,
) -> MatchResult:
    """
    Pair every member with exactly one same-gender committee member.

    `previous` maps member id -> last period's committee member id and is
    only given for rotation; it is a soft preference that never overrides
    balance. `current_load` holds assignments already stored for the
    period so gap-filling runs stay balanced.
    Pure function — no I/O, no metrics, no logging.
    """
    previous = previous or {}
    result = MatchResult()

    by_id = {c.id: c for c in committee}
    pools: dict[Gender, list[CommitteeMember]] = {g: [] for g in Gender}
    for cm in sorted(committee, key=lambda c: c.id):
        pools[cm.gender].append(cm)
    load = {c.id: 0 for c in committee}
    for cm_id, count in (current_load or {}).items():
        if cm_id in load:
            load[cm_id] = count

    claim_table, conflicts = _claim_table(claims, {m.id for m in members})
    result.exceptions.extend(conflicts)

    unclaimed: list[Member] = []
    for member in members:
        claim = claim_table.get(member.id)
        if claim is None:
            unclaimed.append(member)
            continue
        claimant = by_id.get(claim.committee_member_id)
        if claimant is None:
            result.exceptions.append(ExceptionRecord(
                member_id=member.id,
                committee_member_id=claim.committee_member_id,
                reason=ExceptionReason.CLAIM_VOID,
                detail="Claimant is not an eligible committee member; claim ignored",
            ))
            unclaimed.append(member)
        elif claimant.gender != member.gender:
            result.exceptions.append(ExceptionRecord(
                member_id=member.id,
                committee_member_id=claimant.id,
                reason=ExceptionReason.CLAIM_GENDER_MISMATCH,
                detail=(
                    f"Claimant is {claimant.gender.value}, member is "
                    f"{member.gender.value}; claim ignored"
                ),
            ))
            unclaimed.append(member)
        else:
            result.pairs.append(Pair(member_id=member.id, committee_member_id=claimant.id))
            load[claimant.id] += 1

    for member in unclaimed:
        pool = pools[member.gender]
        if not pool:
            result.exceptions.append(ExceptionRecord(
                member_id=member.id,
                reason=ExceptionReason.UNMATCHABLE,
                detail=f"No eligible {member.gender.value} committee member",
            ))
            continue
        chosen = _least_loaded(pool, load, previous.get(member.id))
        result.pairs.append(Pair(member_id=member.id, committee_member_id=chosen.id))
        load[chosen.id] += 1

    return result


def load_by_committee_member(pairs: Iterable[Pair]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for pair in pairs:
        counts[pair.committee_member_id] = counts.get(pair.committee_member_id, 0) + 1
    return counts
