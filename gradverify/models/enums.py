# gradverify/models/enums.py
from __future__ import annotations
from enum import Enum


class UserRole(str, Enum):
    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class VerificationStatus(str, Enum):
    # shared by every reviewable artifact
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DocumentType(str, Enum):
    PSA = "psa"
    PHOTO = "photo"


class AwardType(str, Enum):
    LATIN_HONOR = "latin_honor"
    ACADEMIC_ACHIEVEMENT = "academic_achievement"
    DEPARTMENT_AWARD = "department_award"
    SPECIAL_RECOGNITION = "special_recognition"
    OTHER = "other"


class Category(str, Enum):
    PSA = "psa"
    PHOTO = "photo"
    AWARDS = "awards"


class Decision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class SubmissionStep(str, Enum):
    PROFILE = "profile"
    PSA = "psa"
    PHOTO = "photo"
    AWARDS = "awards"
    COMPLETE = "complete"


REVIEWER_ROLES = frozenset({UserRole.FACULTY, UserRole.ADMIN, UserRole.SUPERADMIN})

CATEGORY_FOR_DOCUMENT_TYPE = {
    DocumentType.PSA: Category.PSA,
    DocumentType.PHOTO: Category.PHOTO,
}
