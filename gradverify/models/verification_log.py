# gradverify/models/verification_log.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import String, DateTime, Integer, ForeignKey, Index, JSON, func
from sqlalchemy.orm import Mapped, mapped_column

from gradverify.db.base import Base


class VerificationLog(Base):
    """
    Append-only trail of reviewer decisions (never UPDATE).
    """
    __tablename__ = "verification_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    reviewer_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    student_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("student_profiles.id", ondelete="CASCADE"), nullable=False
    )

    target_kind: Mapped[str] = mapped_column(String(16), nullable=False)  # document | award
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    action: Mapped[str] = mapped_column(String(32), nullable=False)  # approve | reject

    request_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    details_json: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_verification_logs_target", "target_kind", "target_id"),
        Index("ix_verification_logs_student", "student_id"),
        Index("ix_verification_logs_created_at", "created_at"),
    )
