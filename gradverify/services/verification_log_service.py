# gradverify/services/verification_log_service.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from gradverify.models.verification_log import VerificationLog


class VerificationLogService:
    def write(
        self,
        db: Session,
        *,
        reviewer_id: int,
        student_id: int,
        target_kind: str,
        target_id: int,
        action: str,
        request_id: Optional[str],
        details: Dict[str, Any],
    ) -> VerificationLog:
        """
        Append-only insert. `details` holds feedback and resulting statuses,
        never file contents.
        """
        row = VerificationLog(
            reviewer_id=reviewer_id,
            student_id=student_id,
            target_kind=target_kind,
            target_id=target_id,
            action=action,
            request_id=request_id,
            details_json=details,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    def history(self, db: Session, *, target_kind: str, target_id: int) -> List[VerificationLog]:
        return list(
            db.execute(
                select(VerificationLog)
                .where(
                    VerificationLog.target_kind == target_kind,
                    VerificationLog.target_id == target_id,
                )
                .order_by(VerificationLog.created_at.asc(), VerificationLog.id.asc())
            ).scalars().all()
        )
