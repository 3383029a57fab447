# gradverify/schemas/review.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from gradverify.models.enums import Decision
from gradverify.schemas.profile import AggregateResponse


class DecisionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    decision: Decision
    feedback: Optional[str] = Field(default=None, max_length=2000)


class NotificationPreview(BaseModel):
    title: str
    message: str


class DocumentDecisionResponse(BaseModel):
    document_id: int
    status: str
    feedback: Optional[str] = None
    aggregate: AggregateResponse
    notification: NotificationPreview


class AwardDecisionResponse(BaseModel):
    award_id: int
    status: str
    feedback: Optional[str] = None
    aggregate: AggregateResponse
    notification: NotificationPreview


class VerificationLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reviewer_id: int
    student_id: int
    target_kind: str
    target_id: int
    action: str
    request_id: Optional[str] = None
    details_json: Dict[str, Any]
    created_at: Optional[datetime] = None
