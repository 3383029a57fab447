import pytest

from gradverify.core.errors import StepLocked
from gradverify.core.submission_gate import (
    active_step,
    is_step_unlocked,
    require_step_unlocked,
    unlocked_steps,
)
from gradverify.models.enums import SubmissionStep, VerificationStatus

P = VerificationStatus.PENDING
A = VerificationStatus.APPROVED
R = VerificationStatus.REJECTED


def test_incomplete_profile_is_the_active_step():
    assert active_step(False, A, A, A) == SubmissionStep.PROFILE


@pytest.mark.parametrize(
    "psa, photo, awards, expected",
    [
        (P, P, A, SubmissionStep.PSA),
        (R, P, A, SubmissionStep.PSA),
        (A, P, P, SubmissionStep.PHOTO),
        (A, R, A, SubmissionStep.PHOTO),
        (A, A, P, SubmissionStep.AWARDS),
        (A, A, R, SubmissionStep.AWARDS),
        (A, A, A, SubmissionStep.COMPLETE),
    ],
)
def test_active_step_follows_fixed_order(psa, photo, awards, expected):
    assert active_step(True, psa, photo, awards) == expected


def test_active_step_accepts_raw_strings():
    assert active_step(True, "approved", "pending", "approved") == SubmissionStep.PHOTO


def test_profile_is_always_unlocked():
    assert is_step_unlocked(SubmissionStep.PROFILE, False, P, P) is True


def test_psa_needs_complete_profile():
    assert is_step_unlocked(SubmissionStep.PSA, False, P, P) is False
    assert is_step_unlocked(SubmissionStep.PSA, True, P, P) is True


def test_photo_needs_approved_psa():
    assert is_step_unlocked(SubmissionStep.PHOTO, True, P, P) is False
    assert is_step_unlocked(SubmissionStep.PHOTO, True, R, P) is False
    assert is_step_unlocked(SubmissionStep.PHOTO, True, A, P) is True


def test_awards_need_approved_photo():
    assert is_step_unlocked(SubmissionStep.AWARDS, True, A, R) is False
    assert is_step_unlocked(SubmissionStep.AWARDS, True, A, A) is True


def test_complete_is_never_a_submission_target():
    assert is_step_unlocked(SubmissionStep.COMPLETE, True, A, A) is False


def test_unlocked_steps_excludes_complete():
    steps = unlocked_steps(True, A, P)
    assert SubmissionStep.COMPLETE not in steps
    assert steps == {
        SubmissionStep.PROFILE: True,
        SubmissionStep.PSA: True,
        SubmissionStep.PHOTO: True,
        SubmissionStep.AWARDS: False,
    }


def test_require_step_unlocked_passes_silently_when_open():
    require_step_unlocked(SubmissionStep.PHOTO, True, A, P, A)


def test_require_step_unlocked_reports_active_step():
    with pytest.raises(StepLocked) as exc:
        require_step_unlocked(SubmissionStep.PHOTO, True, R, P, A)

    assert exc.value.step == SubmissionStep.PHOTO
    assert exc.value.active_step == SubmissionStep.PSA
    assert "PSA birth certificate must be approved" in exc.value.reason


def test_require_step_unlocked_psa_without_profile():
    with pytest.raises(StepLocked) as exc:
        require_step_unlocked(SubmissionStep.PSA, False, P, P, A)

    assert exc.value.active_step == SubmissionStep.PROFILE
    assert "student profile" in exc.value.reason
