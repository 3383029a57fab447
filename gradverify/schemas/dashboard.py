from __future__ import annotations

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    total_students: int = 0
    pending_verifications: int = 0
    approved_records: int = 0
    rejected_records: int = 0


class DepartmentProgress(BaseModel):
    department: str
    total: int
    approved: int
    percent_complete: int = Field(..., ge=0, le=100)


class RecentSubmission(BaseModel):
    id: int
    student_number: str
    full_name: str
    program: str
    department: str
    psa_status: str
    photo_status: str
    awards_status: str
    overall_status: str
    updated_at: Optional[datetime] = None
