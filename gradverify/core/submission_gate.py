# gradverify/core/submission_gate.py
from __future__ import annotations

from typing import Dict, Union

from gradverify.core.errors import StepLocked
from gradverify.models.enums import SubmissionStep, VerificationStatus

Status = Union[VerificationStatus, str]

# Fixed verification order; a step accepts input only once every step before it
# is approved.
STEP_ORDER = (
    SubmissionStep.PROFILE,
    SubmissionStep.PSA,
    SubmissionStep.PHOTO,
    SubmissionStep.AWARDS,
    SubmissionStep.COMPLETE,
)

STEP_LABELS: Dict[SubmissionStep, str] = {
    SubmissionStep.PROFILE: "student profile",
    SubmissionStep.PSA: "PSA birth certificate",
    SubmissionStep.PHOTO: "graduation photo",
    SubmissionStep.AWARDS: "awards",
    SubmissionStep.COMPLETE: "verification",
}


def _approved(status: Status) -> bool:
    return VerificationStatus(status) == VerificationStatus.APPROVED


def active_step(
    profile_complete: bool,
    psa_status: Status,
    photo_status: Status,
    awards_status: Status,
) -> SubmissionStep:
    """
    The step the student is currently required to work on.
    """
    if not profile_complete:
        return SubmissionStep.PROFILE
    if not _approved(psa_status):
        return SubmissionStep.PSA
    if not _approved(photo_status):
        return SubmissionStep.PHOTO
    if not _approved(awards_status):
        return SubmissionStep.AWARDS
    return SubmissionStep.COMPLETE


def is_step_unlocked(
    step: SubmissionStep,
    profile_complete: bool,
    psa_status: Status,
    photo_status: Status,
) -> bool:
    step = SubmissionStep(step)
    if step == SubmissionStep.PROFILE:
        return True
    if step == SubmissionStep.PSA:
        return bool(profile_complete)
    if step == SubmissionStep.PHOTO:
        return _approved(psa_status)
    if step == SubmissionStep.AWARDS:
        return _approved(photo_status)
    # COMPLETE is a terminal marker, never a submission target
    return False


def unlocked_steps(
    profile_complete: bool,
    psa_status: Status,
    photo_status: Status,
) -> Dict[SubmissionStep, bool]:
    return {
        step: is_step_unlocked(step, profile_complete, psa_status, photo_status)
        for step in STEP_ORDER
        if step != SubmissionStep.COMPLETE
    }


def require_step_unlocked(
    step: SubmissionStep,
    profile_complete: bool,
    psa_status: Status,
    photo_status: Status,
    awards_status: Status,
) -> None:
    step = SubmissionStep(step)
    if is_step_unlocked(step, profile_complete, psa_status, photo_status):
        return

    current = active_step(profile_complete, psa_status, photo_status, awards_status)
    if step == SubmissionStep.COMPLETE:
        reason = "Verification is not a submission step."
    else:
        previous = STEP_ORDER[STEP_ORDER.index(step) - 1]
        if previous == SubmissionStep.PROFILE:
            reason = "Complete your student profile before uploading a PSA birth certificate."
        else:
            reason = (
                f"Your {STEP_LABELS[previous]} must be approved before you can submit "
                f"your {STEP_LABELS[step]}."
            )
    raise StepLocked(step=step, active_step=current, reason=reason)
