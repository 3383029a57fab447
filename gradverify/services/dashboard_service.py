# gradverify/services/dashboard_service.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import case, select, func
from sqlalchemy.orm import Session

from gradverify.models.award import Award
from gradverify.models.document import Document
from gradverify.models.enums import DocumentType, VerificationStatus
from gradverify.models.student_profile import StudentProfile
from gradverify.models.user import User


class DashboardService:
    """
    Reviewer-facing numbers. Reads only the cached aggregate columns on
    student_profiles plus the artifact tables for the review queues.
    """

    def stats(self, db: Session) -> Dict[str, int]:
        rows = db.execute(
            select(StudentProfile.overall_status, func.count())
            .group_by(StudentProfile.overall_status)
        ).all()
        by_status = {status: int(n) for status, n in rows}

        return {
            "total_students": sum(by_status.values()),
            "pending_verifications": by_status.get(VerificationStatus.PENDING.value, 0),
            "approved_records": by_status.get(VerificationStatus.APPROVED.value, 0),
            "rejected_records": by_status.get(VerificationStatus.REJECTED.value, 0),
        }

    def department_progress(self, db: Session) -> List[Dict[str, Any]]:
        approved = func.sum(
            case((StudentProfile.overall_status == VerificationStatus.APPROVED.value, 1), else_=0)
        )
        rows = db.execute(
            select(
                StudentProfile.department,
                func.count(),
                approved,
            )
            .group_by(StudentProfile.department)
            .order_by(StudentProfile.department)
        ).all()

        out = []
        for department, total, n_approved in rows:
            total = int(total or 0)
            n_approved = int(n_approved or 0)
            out.append(
                {
                    "department": department,
                    "total": total,
                    "approved": n_approved,
                    "percent_complete": int(round(n_approved * 100 / total)) if total else 0,
                }
            )
        return out

    def recent_submissions(self, db: Session, *, limit: int = 10) -> List[Dict[str, Any]]:
        rows = db.execute(
            select(StudentProfile, User.name)
            .join(User, User.id == StudentProfile.user_id)
            .order_by(StudentProfile.updated_at.desc(), StudentProfile.id.desc())
            .limit(limit)
        ).all()

        return [
            {
                "id": p.id,
                "student_number": p.student_number,
                "full_name": name,
                "program": p.program,
                "department": p.department,
                "psa_status": p.psa_status,
                "photo_status": p.photo_status,
                "awards_status": p.awards_status,
                "overall_status": p.overall_status,
                "updated_at": p.updated_at,
            }
            for p, name in rows
        ]

    # ---------------------------
    # REVIEW QUEUES
    # ---------------------------

    def list_students(self, db: Session, *, department: Optional[str] = None) -> List[StudentProfile]:
        q = select(StudentProfile).order_by(StudentProfile.student_number)
        if department:
            q = q.where(StudentProfile.department == department)
        return list(db.execute(q).scalars().all())

    def get_student(self, db: Session, *, student_id: int) -> Optional[StudentProfile]:
        return db.execute(
            select(StudentProfile).where(StudentProfile.id == student_id)
        ).scalar_one_or_none()

    def documents_by_status(
        self,
        db: Session,
        *,
        status: VerificationStatus = VerificationStatus.PENDING,
        document_type: Optional[DocumentType] = None,
    ) -> List[Document]:
        q = (
            select(Document)
            .where(Document.status == VerificationStatus(status).value)
            .order_by(Document.created_at.asc(), Document.id.asc())
        )
        if document_type:
            q = q.where(Document.document_type == DocumentType(document_type).value)
        return list(db.execute(q).scalars().all())

    def awards_by_status(
        self,
        db: Session,
        *,
        status: VerificationStatus = VerificationStatus.PENDING,
    ) -> List[Award]:
        return list(
            db.execute(
                select(Award)
                .where(Award.status == VerificationStatus(status).value)
                .order_by(Award.created_at.asc(), Award.id.asc())
            ).scalars().all()
        )
