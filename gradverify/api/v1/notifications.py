# gradverify/api/v1/notifications.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gradverify.api.v1.errors import http_error
from gradverify.core.auth_deps import get_current_principal
from gradverify.core.errors import VerificationError
from gradverify.db.session import get_db
from gradverify.policies.rbac import Principal
from gradverify.schemas.notifications import NotificationListResponse, NotificationResponse
from gradverify.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications")


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    svc = NotificationService()
    rows = svc.list_for_user(db, user_id=principal.user_id)
    return NotificationListResponse(
        unread=svc.unread_count(db, user_id=principal.user_id),
        notifications=[NotificationResponse.model_validate(n) for n in rows],
    )


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        n = NotificationService().mark_as_read(
            db, notification_id=notification_id, user_id=principal.user_id
        )
    except VerificationError as e:
        raise http_error(e)
    return NotificationResponse.model_validate(n)
