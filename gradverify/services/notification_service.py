# gradverify/services/notification_service.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from gradverify.core.errors import NotFound
from gradverify.models.notification import Notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationMessage:
    """A message to one student, emitted by a review decision."""
    recipient_user_id: int
    title: str
    message: str


class NotificationSink(ABC):
    """
    Fire-and-forget delivery. Implementations may raise; callers treat
    delivery as best-effort.
    """

    @abstractmethod
    def send(self, message: NotificationMessage) -> None:
        ...


class DbNotificationSink(NotificationSink):
    def __init__(self, db: Session):
        self.db = db

    def send(self, message: NotificationMessage) -> None:
        row = Notification(
            user_id=message.recipient_user_id,
            title=message.title,
            message=message.message,
            is_read=False,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(
            "notification stored",
            extra={"user_id": message.recipient_user_id, "notification_id": row.id},
        )


class NotificationService:
    def list_for_user(self, db: Session, *, user_id: int) -> List[Notification]:
        return list(
            db.execute(
                select(Notification)
                .where(Notification.user_id == user_id)
                .order_by(Notification.created_at.desc(), Notification.id.desc())
            ).scalars().all()
        )

    def unread_count(self, db: Session, *, user_id: int) -> int:
        n = db.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        ).scalar_one()
        return int(n or 0)

    def mark_as_read(self, db: Session, *, notification_id: int, user_id: int) -> Notification:
        """
        Only the recipient may flip the read flag; someone else's id looks
        exactly like a missing one.
        """
        row = db.execute(
            select(Notification).where(Notification.id == notification_id)
        ).scalar_one_or_none()
        if not row or row.user_id != user_id:
            raise NotFound("Notification not found.")

        if not row.is_read:
            row.is_read = True
            db.commit()
            db.refresh(row)
        return row
