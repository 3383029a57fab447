# gradverify/api/v1/dashboard.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gradverify.core.auth_deps import require
from gradverify.db.session import get_db
from gradverify.policies.rbac import ACTION_VIEW_DASHBOARD, Principal
from gradverify.schemas.dashboard import DashboardStats, DepartmentProgress, RecentSubmission
from gradverify.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard")


@router.get("/stats", response_model=DashboardStats)
def stats(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_VIEW_DASHBOARD)),
):
    return DashboardStats(**DashboardService().stats(db))


@router.get("/department-progress", response_model=List[DepartmentProgress])
def department_progress(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_VIEW_DASHBOARD)),
):
    return [DepartmentProgress(**row) for row in DashboardService().department_progress(db)]


@router.get("/recent-submissions", response_model=List[RecentSubmission])
def recent_submissions(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_VIEW_DASHBOARD)),
):
    return [
        RecentSubmission(**row)
        for row in DashboardService().recent_submissions(db, limit=limit)
    ]
