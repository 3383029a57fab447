# gradverify/api/v1/review.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from gradverify.api.v1.errors import http_error
from gradverify.core.auth_deps import require
from gradverify.core.errors import AggregateRecomputeFailed, VerificationError
from gradverify.db.session import get_db
from gradverify.models.enums import (
    Category,
    DocumentType,
    VerificationStatus,
)
from gradverify.policies.rbac import ACTION_REVIEW, Principal
from gradverify.schemas.artifacts import AwardResponse, DocumentResponse
from gradverify.schemas.profile import AggregateResponse
from gradverify.schemas.review import (
    AwardDecisionResponse,
    DecisionRequest,
    DocumentDecisionResponse,
    NotificationPreview,
    VerificationLogResponse,
)
from gradverify.services.dashboard_service import DashboardService
from gradverify.services.verification_engine import engine_for_session
from gradverify.services.verification_log_service import VerificationLogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/review")


# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────

def _log_decision(
    db: Session,
    request: Request,
    *,
    principal: Principal,
    artifact,
    target_kind: str,
    decision: str,
    aggregate=None,
) -> None:
    details = {
        "status": artifact.status,
        "feedback": artifact.feedback,
        "reviewer_role": principal.role.value,
    }
    if aggregate is not None:
        details["overall_status"] = aggregate.overall_status.value
    else:
        details["aggregate_recompute_failed"] = True

    VerificationLogService().write(
        db,
        reviewer_id=principal.user_id,
        student_id=artifact.student_id,
        target_kind=target_kind,
        target_id=artifact.id,
        action=decision,
        request_id=getattr(request.state, "request_id", None),
        details=details,
    )


def _apply(
    db: Session,
    request: Request,
    principal: Principal,
    *,
    artifact_id: int,
    category: Optional[Category],
    target_kind: str,
    req: DecisionRequest,
):
    """`category=None` lets the engine read it off the document itself."""
    engine = engine_for_session(db)
    try:
        if category is None:
            result = engine.apply_document_decision(
                artifact_id, req.decision, req.feedback, principal.user_id
            )
        else:
            result = engine.apply_decision(
                artifact_id, category, req.decision, req.feedback, principal.user_id
            )
    except AggregateRecomputeFailed as e:
        # the artifact decision is durable; record it before reporting
        _log_decision(
            db, request,
            principal=principal,
            artifact=e.artifact,
            target_kind=target_kind,
            decision=req.decision.value,
        )
        raise http_error(e)
    except VerificationError as e:
        raise http_error(e)

    _log_decision(
        db, request,
        principal=principal,
        artifact=result.artifact,
        target_kind=target_kind,
        decision=req.decision.value,
        aggregate=result.aggregate,
    )
    return result


# ─────────────────────────────────────────────────────────────
# DECISIONS
# ─────────────────────────────────────────────────────────────

@router.post("/documents/{document_id}/decision", response_model=DocumentDecisionResponse)
def decide_document(
    document_id: int,
    req: DecisionRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_REVIEW)),
):
    result = _apply(
        db, request, principal,
        artifact_id=document_id,
        category=None,
        target_kind="document",
        req=req,
    )
    return DocumentDecisionResponse(
        document_id=result.artifact.id,
        status=result.artifact.status,
        feedback=result.artifact.feedback,
        aggregate=AggregateResponse.from_aggregate(result.aggregate),
        notification=NotificationPreview(
            title=result.notification.title, message=result.notification.message
        ),
    )


@router.post("/awards/{award_id}/decision", response_model=AwardDecisionResponse)
def decide_award(
    award_id: int,
    req: DecisionRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_REVIEW)),
):
    result = _apply(
        db, request, principal,
        artifact_id=award_id,
        category=Category.AWARDS,
        target_kind="award",
        req=req,
    )
    return AwardDecisionResponse(
        award_id=result.artifact.id,
        status=result.artifact.status,
        feedback=result.artifact.feedback,
        aggregate=AggregateResponse.from_aggregate(result.aggregate),
        notification=NotificationPreview(
            title=result.notification.title, message=result.notification.message
        ),
    )


@router.post("/students/{student_id}/recompute", response_model=AggregateResponse)
def recompute_student(
    student_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_REVIEW)),
):
    try:
        agg = engine_for_session(db).recompute_for_student(student_id)
    except VerificationError as e:
        raise http_error(e)

    logger.info(
        "aggregate recomputed on request",
        extra={"student_id": student_id, "reviewer_id": principal.user_id},
    )
    return AggregateResponse.from_aggregate(agg)


# ─────────────────────────────────────────────────────────────
# QUEUES
# ─────────────────────────────────────────────────────────────

@router.get("/documents", response_model=List[DocumentResponse])
def list_documents(
    status: VerificationStatus = Query(VerificationStatus.PENDING),
    documentType: Optional[DocumentType] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_REVIEW)),
):
    docs = DashboardService().documents_by_status(db, status=status, document_type=documentType)
    return [DocumentResponse.model_validate(d) for d in docs]


@router.get("/awards", response_model=List[AwardResponse])
def list_awards(
    status: VerificationStatus = Query(VerificationStatus.PENDING),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_REVIEW)),
):
    awards = DashboardService().awards_by_status(db, status=status)
    return [AwardResponse.model_validate(a) for a in awards]


# ─────────────────────────────────────────────────────────────
# HISTORY
# ─────────────────────────────────────────────────────────────

@router.get("/documents/{document_id}/history", response_model=List[VerificationLogResponse])
def document_history(
    document_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_REVIEW)),
):
    rows = VerificationLogService().history(db, target_kind="document", target_id=document_id)
    return [VerificationLogResponse.model_validate(r) for r in rows]


@router.get("/awards/{award_id}/history", response_model=List[VerificationLogResponse])
def award_history(
    award_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require(ACTION_REVIEW)),
):
    rows = VerificationLogService().history(db, target_kind="award", target_id=award_id)
    return [VerificationLogResponse.model_validate(r) for r in rows]
