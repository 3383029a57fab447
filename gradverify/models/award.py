# gradverify/models/award.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Integer, ForeignKey, Index, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gradverify.db.base import Base
from gradverify.models.enums import VerificationStatus


class Award(Base):
    __tablename__ = "awards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    student_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("student_profiles.id", ondelete="CASCADE"), nullable=False
    )

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    award_type: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # proof file metadata (optional)
    proof_file_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    proof_file_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    proof_mime_type: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    status: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=text(f"'{VerificationStatus.PENDING.value}'")
    )
    feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    verified_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    student = relationship("StudentProfile", back_populates="awards")

    __table_args__ = (
        Index("ix_awards_student", "student_id"),
        Index("ix_awards_status", "status"),
    )
