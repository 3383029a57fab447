# gradverify/services/aggregate.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from gradverify.models.award import Award
from gradverify.models.document import Document
from gradverify.models.enums import VerificationStatus


@dataclass(frozen=True)
class AggregateStatuses:
    psa_status: VerificationStatus
    photo_status: VerificationStatus
    awards_status: VerificationStatus
    overall_status: VerificationStatus


@dataclass(frozen=True)
class StudentVerificationAggregate:
    """
    Derived per-student view. Always re-derivable from the student's
    authoritative documents and full award list.
    """
    student_id: int
    profile_complete: bool
    psa_status: VerificationStatus
    photo_status: VerificationStatus
    awards_status: VerificationStatus
    overall_status: VerificationStatus

    @classmethod
    def build(cls, student_id: int, profile_complete: bool, statuses: AggregateStatuses):
        return cls(
            student_id=student_id,
            profile_complete=profile_complete,
            psa_status=statuses.psa_status,
            photo_status=statuses.photo_status,
            awards_status=statuses.awards_status,
            overall_status=statuses.overall_status,
        )


def is_profile_complete(
    student_number: Optional[str],
    program: Optional[str],
    department: Optional[str],
) -> bool:
    return all(v and v.strip() for v in (student_number, program, department))


def _status_of(doc: Optional[Document]) -> VerificationStatus:
    if doc is None or not doc.status:
        return VerificationStatus.PENDING
    return VerificationStatus(doc.status)


def awards_status(awards: Iterable[Award]) -> VerificationStatus:
    """
    Zero awards count as approved: a student with no claimed honors has
    nothing left to verify in this category.
    """
    statuses = [VerificationStatus(a.status or VerificationStatus.PENDING) for a in awards]
    if not statuses:
        return VerificationStatus.APPROVED
    if VerificationStatus.REJECTED in statuses:
        return VerificationStatus.REJECTED
    if all(s == VerificationStatus.APPROVED for s in statuses):
        return VerificationStatus.APPROVED
    return VerificationStatus.PENDING


def overall_status(
    psa: VerificationStatus,
    photo: VerificationStatus,
    awards: VerificationStatus,
) -> VerificationStatus:
    parts = (psa, photo, awards)
    if VerificationStatus.REJECTED in parts:
        return VerificationStatus.REJECTED
    if all(p == VerificationStatus.APPROVED for p in parts):
        return VerificationStatus.APPROVED
    return VerificationStatus.PENDING


def recompute(
    psa_doc: Optional[Document],
    photo_doc: Optional[Document],
    awards: Sequence[Award],
) -> AggregateStatuses:
    """
    Pure projection of one student's artifacts into category statuses.
    """
    psa = _status_of(psa_doc)
    photo = _status_of(photo_doc)
    aw = awards_status(awards)
    return AggregateStatuses(
        psa_status=psa,
        photo_status=photo,
        awards_status=aw,
        overall_status=overall_status(psa, photo, aw),
    )


def progress_percent(
    profile_complete: bool,
    psa: VerificationStatus,
    photo: VerificationStatus,
    awards: Sequence[Award],
) -> int:
    """
    Completion shown on the student status tracker.
    Awards only count as a step once the student has claimed at least one.
    """
    total = 3
    done = 0
    if profile_complete:
        done += 1
    if VerificationStatus(psa) == VerificationStatus.APPROVED:
        done += 1
    if VerificationStatus(photo) == VerificationStatus.APPROVED:
        done += 1

    if awards:
        total += 1
        if all(VerificationStatus(a.status) == VerificationStatus.APPROVED for a in awards):
            done += 1

    return int(round(done * 100 / total))
