# gradverify/models/student_profile.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Integer, ForeignKey, Index, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gradverify.db.base import Base
from gradverify.models.enums import VerificationStatus


class StudentProfile(Base):
    """
    Student identity plus the cached verification aggregate.

    The four *_status columns are a projection of the student's documents and
    awards. They are only ever written by the aggregate recomputation.
    """
    __tablename__ = "student_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    student_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    program: Mapped[str] = mapped_column(String(128), nullable=False)
    department: Mapped[str] = mapped_column(String(128), nullable=False)

    date_of_birth: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    place_of_birth: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    sex: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    contact_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    psa_status: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=text(f"'{VerificationStatus.PENDING.value}'")
    )
    photo_status: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=text(f"'{VerificationStatus.PENDING.value}'")
    )
    awards_status: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=text(f"'{VerificationStatus.PENDING.value}'")
    )
    overall_status: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=text(f"'{VerificationStatus.PENDING.value}'")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", back_populates="student_profile")
    documents = relationship("Document", back_populates="student", cascade="all, delete-orphan")
    awards = relationship("Award", back_populates="student", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_student_profiles_department", "department"),
        Index("ix_student_profiles_overall_status", "overall_status"),
    )
