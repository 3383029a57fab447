import pytest

from conftest import make_profile, make_user, principal_for
from gradverify.core.errors import AggregateRecomputeFailed, InvalidArgument, NotFound, StepLocked
from gradverify.models.enums import (
    AwardType,
    Category,
    Decision,
    DocumentType,
    SubmissionStep,
    UserRole,
)
from gradverify.services.repository import SqlVerificationRepository
from gradverify.services.submission_service import SubmissionService
from gradverify.services.verification_engine import engine_for_session


def _upload(db, principal, kind=DocumentType.PSA, mime="application/pdf", size=2048):
    return SubmissionService().upload_document(
        db,
        principal,
        document_type=kind,
        file_name=f"{kind.value}.pdf",
        file_size=size,
        mime_type=mime,
    )


def _approve(db, doc, reviewer):
    category = Category.PSA if doc.document_type == "psa" else Category.PHOTO
    engine_for_session(db).apply_decision(doc.id, category, Decision.APPROVE, None, reviewer.id)


def test_save_profile_creates_and_updates(db, student):
    svc = SubmissionService()
    p = principal_for(student)

    profile = svc.save_profile(
        db, p, student_number="2021-00042", program="BS Nursing", department="College of Nursing"
    )
    assert profile.id is not None
    assert profile.overall_status == "pending"
    # zero awards
    assert profile.awards_status == "approved"

    updated = svc.save_profile(db, p, contact_number="09171234567")
    assert updated.id == profile.id
    assert updated.contact_number == "09171234567"
    assert updated.student_number == "2021-00042"


def test_new_profile_requires_identity_fields(db, student):
    with pytest.raises(InvalidArgument):
        SubmissionService().save_profile(db, principal_for(student), student_number="2021-00042")


def test_profile_rejects_status_fields(db, student):
    with pytest.raises(InvalidArgument):
        SubmissionService().save_profile(
            db,
            principal_for(student),
            student_number="2021-00042",
            program="BSCS",
            department="CCS",
            overall_status="approved",
        )


def test_duplicate_student_number(db, student):
    other = make_user(db, email="other@example.edu")
    make_profile(db, other, student_number="2021-00042")

    with pytest.raises(InvalidArgument):
        SubmissionService().save_profile(
            db, principal_for(student), student_number="2021-00042", program="BSCS", department="CCS"
        )


def test_reviewer_cannot_submit_profile(db, faculty):
    with pytest.raises(PermissionError):
        SubmissionService().save_profile(
            db, principal_for(faculty), student_number="X", program="Y", department="Z"
        )


def test_upload_without_profile_is_not_found(db, student):
    with pytest.raises(NotFound):
        _upload(db, principal_for(student))


def test_photo_locked_until_psa_approved(db, student, faculty):
    make_profile(db, student)
    p = principal_for(student)

    _upload(db, p)
    with pytest.raises(StepLocked) as exc:
        _upload(db, p, kind=DocumentType.PHOTO, mime="image/jpeg")
    assert exc.value.active_step == SubmissionStep.PSA


def test_awards_locked_until_photo_approved(db, student, faculty):
    make_profile(db, student)
    p = principal_for(student)
    svc = SubmissionService()

    _approve(db, _upload(db, p), faculty)
    with pytest.raises(StepLocked):
        svc.submit_award(db, p, name="Cum Laude", award_type=AwardType.LATIN_HONOR)

    _approve(db, _upload(db, p, kind=DocumentType.PHOTO, mime="image/png"), faculty)
    award = svc.submit_award(db, p, name="Cum Laude", award_type=AwardType.LATIN_HONOR)
    assert award.status == "pending"

    status = svc.status(db, p)
    assert status.aggregate.awards_status.value == "pending"
    assert status.active_step == SubmissionStep.AWARDS
    assert status.progress_percent == 75


def test_upload_checks_mime_and_size(db, student):
    make_profile(db, student)
    p = principal_for(student)

    with pytest.raises(InvalidArgument):
        _upload(db, p, mime="text/plain")
    with pytest.raises(InvalidArgument):
        _upload(db, p, size=0)
    with pytest.raises(InvalidArgument):
        _upload(db, p, size=SubmissionService().settings.max_upload_bytes + 1)


def test_reupload_after_rejection_becomes_authoritative(db, student, faculty):
    make_profile(db, student)
    p = principal_for(student)
    svc = SubmissionService()

    first = _upload(db, p)
    engine_for_session(db).apply_decision(
        first.id, Category.PSA, Decision.REJECT, "blurry image", faculty.id
    )
    assert svc.status(db, p).rejection_feedback == ["blurry image"]

    second = _upload(db, p)
    st = svc.status(db, p)

    assert st.psa_document.id == second.id
    assert st.aggregate.psa_status.value == "pending"
    assert st.rejection_feedback == []
    assert st.profile.psa_status == "pending"


def test_status_for_fresh_profile(db, student):
    make_profile(db, student)
    st = SubmissionService().status(db, principal_for(student))

    assert st.active_step == SubmissionStep.PSA
    assert st.unlocked[SubmissionStep.PSA] is True
    assert st.unlocked[SubmissionStep.PHOTO] is False
    assert st.psa_document is None
    assert st.awards == []
    assert st.progress_percent == 33


def test_award_name_required(db, student):
    make_profile(db, student)
    with pytest.raises(InvalidArgument):
        SubmissionService().submit_award(
            db, principal_for(student), name="  ", award_type=AwardType.OTHER
        )


def test_status_before_any_profile(db, student):
    st = SubmissionService().status(db, principal_for(student))

    assert st.profile is None
    assert st.aggregate is None
    assert st.active_step == SubmissionStep.PROFILE
    assert st.progress_percent == 0
    assert st.unlocked == {
        SubmissionStep.PROFILE: True,
        SubmissionStep.PSA: False,
        SubmissionStep.PHOTO: False,
        SubmissionStep.AWARDS: False,
    }


def _broken_save_aggregate(self, aggregate):
    raise OSError("derived view unavailable")


def test_upload_survives_recompute_failure(db, student, monkeypatch):
    make_profile(db, student)
    p = principal_for(student)

    monkeypatch.setattr(SqlVerificationRepository, "save_aggregate", _broken_save_aggregate)
    with pytest.raises(AggregateRecomputeFailed) as exc:
        _upload(db, p)
    monkeypatch.undo()

    docs = SubmissionService().list_documents(db, p)
    assert [d.id for d in docs] == [exc.value.artifact.id]
    assert docs[0].status == "pending"


def test_award_claim_survives_recompute_failure(db, student, faculty, monkeypatch):
    make_profile(db, student)
    p = principal_for(student)
    svc = SubmissionService()
    _approve(db, _upload(db, p), faculty)
    _approve(db, _upload(db, p, kind=DocumentType.PHOTO, mime="image/png"), faculty)

    monkeypatch.setattr(SqlVerificationRepository, "save_aggregate", _broken_save_aggregate)
    with pytest.raises(AggregateRecomputeFailed):
        svc.submit_award(db, p, name="Dean's Lister", award_type=AwardType.ACADEMIC_ACHIEVEMENT)
    monkeypatch.undo()

    assert [a.name for a in svc.list_awards(db, p)] == ["Dean's Lister"]


def test_reviewer_corrects_identity_fields(db, student, faculty):
    profile = make_profile(db, student)
    # stale cache; the correction re-derives it
    profile.psa_status = "approved"
    db.commit()

    corrected = SubmissionService().correct_profile(
        db, principal_for(faculty), student_id=profile.id, program="BS Information Technology"
    )

    assert corrected.program == "BS Information Technology"
    assert corrected.student_number == "2021-00001"
    assert corrected.psa_status == "pending"


def test_correction_rejects_status_and_blank_fields(db, student, faculty):
    profile = make_profile(db, student)
    svc = SubmissionService()

    with pytest.raises(InvalidArgument):
        svc.correct_profile(db, principal_for(faculty), student_id=profile.id, overall_status="approved")
    with pytest.raises(InvalidArgument):
        svc.correct_profile(db, principal_for(faculty), student_id=profile.id, department="  ")


def test_correction_needs_reviewer_and_existing_profile(db, student, faculty):
    profile = make_profile(db, student)
    svc = SubmissionService()

    with pytest.raises(PermissionError):
        svc.correct_profile(db, principal_for(student), student_id=profile.id, program="X")
    with pytest.raises(NotFound):
        svc.correct_profile(db, principal_for(faculty), student_id=profile.id + 100, program="X")
