# gradverify/schemas/profile.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from gradverify.schemas.artifacts import AwardResponse, DocumentResponse


class ProfileUpsertRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    student_number: str = Field(..., min_length=1, max_length=64)
    program: str = Field(..., min_length=1, max_length=128)
    department: str = Field(..., min_length=1, max_length=128)

    date_of_birth: Optional[str] = Field(default=None, max_length=32)
    place_of_birth: Optional[str] = Field(default=None, max_length=256)
    sex: Optional[str] = Field(default=None, max_length=16)
    contact_number: Optional[str] = Field(default=None, max_length=32)


class ProfilePatchRequest(BaseModel):
    """Reviewer correction. Status columns are not accepted here."""

    model_config = ConfigDict(extra="forbid")

    student_number: Optional[str] = Field(default=None, min_length=1, max_length=64)
    program: Optional[str] = Field(default=None, min_length=1, max_length=128)
    department: Optional[str] = Field(default=None, min_length=1, max_length=128)

    date_of_birth: Optional[str] = Field(default=None, max_length=32)
    place_of_birth: Optional[str] = Field(default=None, max_length=256)
    sex: Optional[str] = Field(default=None, max_length=16)
    contact_number: Optional[str] = Field(default=None, max_length=32)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    student_number: str
    program: str
    department: str
    date_of_birth: Optional[str] = None
    place_of_birth: Optional[str] = None
    sex: Optional[str] = None
    contact_number: Optional[str] = None

    psa_status: str
    photo_status: str
    awards_status: str
    overall_status: str

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AggregateResponse(BaseModel):
    student_id: int
    profile_complete: bool
    psa_status: str
    photo_status: str
    awards_status: str
    overall_status: str

    @classmethod
    def from_aggregate(cls, agg) -> "AggregateResponse":
        return cls(
            student_id=agg.student_id,
            profile_complete=agg.profile_complete,
            psa_status=agg.psa_status.value,
            photo_status=agg.photo_status.value,
            awards_status=agg.awards_status.value,
            overall_status=agg.overall_status.value,
        )


class SubmissionStatusResponse(BaseModel):
    # both are None until the student saves a profile
    profile: Optional[ProfileResponse] = None
    aggregate: Optional[AggregateResponse] = None

    active_step: str
    unlocked_steps: Dict[str, bool]
    progress_percent: int = Field(..., ge=0, le=100)

    psa_document: Optional[DocumentResponse] = None
    photo_document: Optional[DocumentResponse] = None
    awards: List[AwardResponse] = Field(default_factory=list)

    rejection_feedback: List[str] = Field(default_factory=list)
