# gradverify/api/v1/students.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gradverify.api.v1.errors import http_error
from gradverify.core.auth_deps import require
from gradverify.core.errors import VerificationError
from gradverify.db.session import get_db
from gradverify.policies.rbac import ACTION_EDIT_STUDENTS, ACTION_VIEW_STUDENTS, Principal
from gradverify.schemas.profile import ProfilePatchRequest, ProfileResponse
from gradverify.services.dashboard_service import DashboardService
from gradverify.services.submission_service import SubmissionService

router = APIRouter(prefix="/students")


@router.get("", response_model=List[ProfileResponse])
def list_students(
    department: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_VIEW_STUDENTS)),
):
    rows = DashboardService().list_students(db, department=department)
    return [ProfileResponse.model_validate(p) for p in rows]


@router.get("/{student_id}", response_model=ProfileResponse)
def get_student(
    student_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_VIEW_STUDENTS)),
):
    profile = DashboardService().get_student(db, student_id=student_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found.")
    return ProfileResponse.model_validate(profile)


@router.patch("/{student_id}", response_model=ProfileResponse)
def correct_student(
    student_id: int,
    req: ProfilePatchRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_EDIT_STUDENTS)),
):
    try:
        profile = SubmissionService().correct_profile(
            db, principal, student_id=student_id, **req.model_dump(exclude_unset=True)
        )
    except (VerificationError, PermissionError) as e:
        raise http_error(e)
    return ProfileResponse.model_validate(profile)
