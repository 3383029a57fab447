from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    message: str
    is_read: bool
    created_at: Optional[datetime] = None


class NotificationListResponse(BaseModel):
    unread: int
    notifications: List[NotificationResponse]
