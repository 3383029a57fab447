# gradverify/schemas/artifacts.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    document_type: str
    file_name: str
    file_size: int
    mime_type: str

    status: str
    feedback: Optional[str] = None
    verified_by: Optional[int] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AwardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    name: str
    award_type: str
    description: Optional[str] = None

    proof_file_name: Optional[str] = None
    proof_mime_type: Optional[str] = None

    status: str
    feedback: Optional[str] = None
    verified_by: Optional[int] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
