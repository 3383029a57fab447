# gradverify/api/v1/student_portal.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from gradverify.api.v1.errors import http_error
from gradverify.core.auth_deps import get_current_principal, require
from gradverify.core.errors import VerificationError
from gradverify.db.session import get_db
from gradverify.models.enums import AwardType, DocumentType
from gradverify.policies.rbac import (
    ACTION_SUBMIT_AWARD,
    ACTION_SUBMIT_PROFILE,
    ACTION_UPLOAD_DOCUMENT,
    Principal,
)
from gradverify.schemas.artifacts import AwardResponse, DocumentResponse
from gradverify.schemas.profile import (
    AggregateResponse,
    ProfileResponse,
    ProfileUpsertRequest,
    SubmissionStatusResponse,
)
from gradverify.services.submission_service import SubmissionService

router = APIRouter(prefix="/student")


def _upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    return len(upload.file.read())


# ─────────────────────────────────────────────────────────────
# PROFILE
# ─────────────────────────────────────────────────────────────

@router.put("/profile", response_model=ProfileResponse)
def save_profile(
    req: ProfileUpsertRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_SUBMIT_PROFILE)),
):
    try:
        profile = SubmissionService().save_profile(db, principal, **req.model_dump(exclude_unset=True))
    except (VerificationError, PermissionError) as e:
        raise http_error(e)
    return ProfileResponse.model_validate(profile)


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    profile = SubmissionService().get_profile(db, user_id=principal.user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found.")
    return ProfileResponse.model_validate(profile)


@router.get("/status", response_model=SubmissionStatusResponse)
def get_status(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        st = SubmissionService().status(db, principal)
    except VerificationError as e:
        raise http_error(e)

    return SubmissionStatusResponse(
        profile=ProfileResponse.model_validate(st.profile) if st.profile else None,
        aggregate=AggregateResponse.from_aggregate(st.aggregate) if st.aggregate else None,
        active_step=st.active_step.value,
        unlocked_steps={step.value: ok for step, ok in st.unlocked.items()},
        progress_percent=st.progress_percent,
        psa_document=DocumentResponse.model_validate(st.psa_document) if st.psa_document else None,
        photo_document=DocumentResponse.model_validate(st.photo_document) if st.photo_document else None,
        awards=[AwardResponse.model_validate(a) for a in st.awards],
        rejection_feedback=st.rejection_feedback,
    )


# ─────────────────────────────────────────────────────────────
# DOCUMENTS
# ─────────────────────────────────────────────────────────────

@router.post("/documents", response_model=DocumentResponse, status_code=201)
def upload_document(
    documentType: DocumentType = Form(...),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_UPLOAD_DOCUMENT)),
):
    try:
        doc = SubmissionService().upload_document(
            db,
            principal,
            document_type=documentType,
            file_name=file.filename or "upload",
            file_size=_upload_size(file),
            mime_type=file.content_type or "application/octet-stream",
        )
    except (VerificationError, PermissionError) as e:
        raise http_error(e)
    return DocumentResponse.model_validate(doc)


@router.get("/documents", response_model=List[DocumentResponse])
def list_documents(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        docs = SubmissionService().list_documents(db, principal)
    except VerificationError as e:
        raise http_error(e)
    return [DocumentResponse.model_validate(d) for d in docs]


# ─────────────────────────────────────────────────────────────
# AWARDS
# ─────────────────────────────────────────────────────────────

@router.post("/awards", response_model=AwardResponse, status_code=201)
def submit_award(
    name: str = Form(...),
    type: AwardType = Form(...),
    description: Optional[str] = Form(None),
    proofFile: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_SUBMIT_AWARD)),
):
    proof_name = proof_size = proof_mime = None
    if proofFile is not None and proofFile.filename:
        proof_name = proofFile.filename
        proof_size = _upload_size(proofFile)
        proof_mime = proofFile.content_type or "application/octet-stream"

    try:
        award = SubmissionService().submit_award(
            db,
            principal,
            name=name,
            award_type=type,
            description=description,
            proof_file_name=proof_name,
            proof_file_size=proof_size,
            proof_mime_type=proof_mime,
        )
    except (VerificationError, PermissionError) as e:
        raise http_error(e)
    return AwardResponse.model_validate(award)


@router.get("/awards", response_model=List[AwardResponse])
def list_awards(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        awards = SubmissionService().list_awards(db, principal)
    except VerificationError as e:
        raise http_error(e)
    return [AwardResponse.model_validate(a) for a in awards]
