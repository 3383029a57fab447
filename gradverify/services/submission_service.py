# gradverify/services/submission_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gradverify.core.config import Settings, get_settings
from gradverify.core.errors import InvalidArgument, NotFound
from gradverify.core.submission_gate import active_step, require_step_unlocked, unlocked_steps
from gradverify.models.award import Award
from gradverify.models.document import Document
from gradverify.models.enums import (
    AwardType,
    DocumentType,
    SubmissionStep,
    VerificationStatus,
)
from gradverify.models.student_profile import StudentProfile
from gradverify.policies.rbac import (
    ACTION_EDIT_STUDENTS,
    ACTION_SUBMIT_AWARD,
    ACTION_SUBMIT_PROFILE,
    ACTION_UPLOAD_DOCUMENT,
    Principal,
    require_action,
)
from gradverify.services.aggregate import StudentVerificationAggregate, progress_percent
from gradverify.services.verification_engine import VerificationEngine, engine_for_session

logger = logging.getLogger(__name__)

PDF = "application/pdf"
JPEG = "image/jpeg"
PNG = "image/png"

ALLOWED_MIME_TYPES: Dict[str, frozenset] = {
    DocumentType.PSA.value: frozenset({PDF, JPEG, PNG}),
    DocumentType.PHOTO.value: frozenset({JPEG, PNG}),
    "award_proof": frozenset({PDF, JPEG, PNG}),
}

STEP_FOR_DOCUMENT_TYPE = {
    DocumentType.PSA: SubmissionStep.PSA,
    DocumentType.PHOTO: SubmissionStep.PHOTO,
}

PROFILE_FIELDS = (
    "student_number",
    "program",
    "department",
    "date_of_birth",
    "place_of_birth",
    "sex",
    "contact_number",
)


@dataclass(frozen=True)
class SubmissionStatus:
    profile: Optional[StudentProfile]
    aggregate: Optional[StudentVerificationAggregate]
    active_step: SubmissionStep
    unlocked: Dict[SubmissionStep, bool]
    progress_percent: int
    psa_document: Optional[Document]
    photo_document: Optional[Document]
    awards: List[Award]
    rejection_feedback: List[str] = field(default_factory=list)


class SubmissionService:
    """
    Student-facing operations: profile, uploads, award claims, status.

    Every write is followed by an aggregate recompute so the cached statuses
    on the profile reflect the new artifact.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _engine(self, db: Session) -> VerificationEngine:
        return engine_for_session(db, settings=self.settings)

    # ---------------------------
    # READS
    # ---------------------------

    def get_profile(self, db: Session, *, user_id: int) -> Optional[StudentProfile]:
        return db.execute(
            select(StudentProfile).where(StudentProfile.user_id == user_id)
        ).scalar_one_or_none()

    def _require_profile(self, db: Session, principal: Principal) -> StudentProfile:
        profile = self.get_profile(db, user_id=principal.user_id)
        if not profile:
            raise NotFound("Student profile not found.")
        return profile

    def list_documents(self, db: Session, principal: Principal) -> List[Document]:
        profile = self._require_profile(db, principal)
        return list(
            db.execute(
                select(Document)
                .where(Document.student_id == profile.id)
                .order_by(Document.created_at.desc(), Document.id.desc())
            ).scalars().all()
        )

    def list_awards(self, db: Session, principal: Principal) -> List[Award]:
        profile = self._require_profile(db, principal)
        return self._engine(db).repository.list_awards(profile.id)

    def status(self, db: Session, principal: Principal) -> SubmissionStatus:
        profile = self.get_profile(db, user_id=principal.user_id)
        if profile is None:
            # nothing submitted yet: only the profile form is open
            return SubmissionStatus(
                profile=None,
                aggregate=None,
                active_step=SubmissionStep.PROFILE,
                unlocked=unlocked_steps(
                    False, VerificationStatus.PENDING, VerificationStatus.PENDING
                ),
                progress_percent=0,
                psa_document=None,
                photo_document=None,
                awards=[],
            )

        engine = self._engine(db)
        repo = engine.repository

        agg = engine.derive_for_student(profile.id)
        psa_doc = repo.get_authoritative_document(profile.id, DocumentType.PSA)
        photo_doc = repo.get_authoritative_document(profile.id, DocumentType.PHOTO)
        awards = repo.list_awards(profile.id)

        feedback = [
            item.feedback
            for item in [psa_doc, photo_doc, *awards]
            if item is not None
            and item.status == VerificationStatus.REJECTED.value
            and item.feedback
        ]

        return SubmissionStatus(
            profile=profile,
            aggregate=agg,
            active_step=active_step(
                agg.profile_complete, agg.psa_status, agg.photo_status, agg.awards_status
            ),
            unlocked=unlocked_steps(agg.profile_complete, agg.psa_status, agg.photo_status),
            progress_percent=progress_percent(
                agg.profile_complete, agg.psa_status, agg.photo_status, awards
            ),
            psa_document=psa_doc,
            photo_document=photo_doc,
            awards=awards,
            rejection_feedback=feedback,
        )

    # ---------------------------
    # MUTATIONS
    # ---------------------------

    def _write_profile(self, db: Session, profile: StudentProfile, fields: Dict[str, object]) -> StudentProfile:
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise InvalidArgument(f"Unknown profile fields: {sorted(unknown)}")
        blank = [k for k in PROFILE_FIELDS[:3] if k in fields and not (fields[k] or "").strip()]
        if blank:
            raise InvalidArgument(f"Profile fields cannot be blank: {blank}")

        for key, value in fields.items():
            setattr(profile, key, value)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise InvalidArgument("Student number is already registered to another account.")
        db.refresh(profile)

        self._engine(db).refresh_aggregate(profile.id)
        db.refresh(profile)
        return profile

    def save_profile(self, db: Session, principal: Principal, **fields) -> StudentProfile:
        """
        Create or update the caller's profile. Only PROFILE_FIELDS are
        accepted; status columns are never writable from here.
        """
        require_action(principal, ACTION_SUBMIT_PROFILE)

        profile = self.get_profile(db, user_id=principal.user_id)
        if profile is None:
            missing = [k for k in PROFILE_FIELDS[:3] if not fields.get(k)]
            if missing:
                raise InvalidArgument(f"Missing required profile fields: {missing}")
            profile = StudentProfile(user_id=principal.user_id)
            db.add(profile)

        profile = self._write_profile(db, profile, fields)

        logger.info("student profile saved", extra={"student_id": profile.id})
        return profile

    def correct_profile(
        self, db: Session, principal: Principal, *, student_id: int, **fields
    ) -> StudentProfile:
        """
        Reviewer-side correction of a student's identity fields.
        """
        require_action(principal, ACTION_EDIT_STUDENTS)

        profile = db.execute(
            select(StudentProfile).where(StudentProfile.id == student_id)
        ).scalar_one_or_none()
        if profile is None:
            raise NotFound("Student profile not found.")

        profile = self._write_profile(db, profile, fields)

        logger.info(
            "student profile corrected",
            extra={"student_id": profile.id, "reviewer_id": principal.user_id, "fields": sorted(fields)},
        )
        return profile

    def _check_file(self, kind: str, mime_type: str, file_size: int) -> None:
        allowed = ALLOWED_MIME_TYPES[kind]
        if mime_type not in allowed:
            raise InvalidArgument(
                f"Unsupported file type {mime_type} for {kind}; allowed: {sorted(allowed)}."
            )
        if file_size <= 0:
            raise InvalidArgument("Uploaded file is empty.")
        if file_size > self.settings.max_upload_bytes:
            raise InvalidArgument(
                f"File exceeds the {self.settings.max_upload_bytes // (1024 * 1024)}MB limit."
            )

    def upload_document(
        self,
        db: Session,
        principal: Principal,
        *,
        document_type: DocumentType,
        file_name: str,
        file_size: int,
        mime_type: str,
    ) -> Document:
        """
        Rules:
        - profile must exist
        - the matching step must be unlocked (PSA after profile, photo after PSA approval)
        - a re-upload creates a new pending row that becomes authoritative
        """
        require_action(principal, ACTION_UPLOAD_DOCUMENT)
        document_type = DocumentType(document_type)

        profile = self._require_profile(db, principal)
        engine = self._engine(db)
        agg = engine.derive_for_student(profile.id)

        require_step_unlocked(
            STEP_FOR_DOCUMENT_TYPE[document_type],
            agg.profile_complete,
            agg.psa_status,
            agg.photo_status,
            agg.awards_status,
        )
        self._check_file(document_type.value, mime_type, file_size)

        doc = engine.repository.save_document(
            Document(
                student_id=profile.id,
                document_type=document_type.value,
                file_name=file_name,
                file_size=file_size,
                mime_type=mime_type,
                status=VerificationStatus.PENDING.value,
            )
        )
        engine.refresh_aggregate(profile.id, doc)

        logger.info(
            "document uploaded",
            extra={"student_id": profile.id, "document_id": doc.id, "document_type": document_type.value},
        )
        return doc

    def submit_award(
        self,
        db: Session,
        principal: Principal,
        *,
        name: str,
        award_type: AwardType,
        description: Optional[str] = None,
        proof_file_name: Optional[str] = None,
        proof_file_size: Optional[int] = None,
        proof_mime_type: Optional[str] = None,
    ) -> Award:
        require_action(principal, ACTION_SUBMIT_AWARD)

        if not name or not name.strip():
            raise InvalidArgument("Award name is required.")

        profile = self._require_profile(db, principal)
        engine = self._engine(db)
        agg = engine.derive_for_student(profile.id)

        require_step_unlocked(
            SubmissionStep.AWARDS,
            agg.profile_complete,
            agg.psa_status,
            agg.photo_status,
            agg.awards_status,
        )
        if proof_file_name:
            self._check_file("award_proof", proof_mime_type or "", proof_file_size or 0)

        award = engine.repository.save_award(
            Award(
                student_id=profile.id,
                name=name.strip(),
                award_type=AwardType(award_type).value,
                description=description,
                proof_file_name=proof_file_name,
                proof_file_size=proof_file_size if proof_file_name else None,
                proof_mime_type=proof_mime_type if proof_file_name else None,
                status=VerificationStatus.PENDING.value,
            )
        )
        engine.refresh_aggregate(profile.id, award)

        logger.info("award submitted", extra={"student_id": profile.id, "award_id": award.id})
        return award
