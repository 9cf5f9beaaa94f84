"""
Notification inbox API schemas.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from marketplace.domain.entities.notification import Notification, NotificationType
from marketplace.domain.value_objects.job_status import JobPriority

from .common import PaginatedResponse


class NotificationResponse(BaseModel):
    """Notification response schema."""

    id: UUID
    type: NotificationType
    title: str
    message: str
    related_job_id: Optional[UUID] = None
    action_url: Optional[str] = None
    priority: JobPriority
    is_read: bool
    read_at: Optional[datetime] = None
    expires_at: datetime
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            related_job_id=notification.related_job_id,
            action_url=notification.action_url,
            priority=notification.priority,
            is_read=notification.is_read,
            read_at=notification.read_at,
            expires_at=notification.expires_at,
            created_at=notification.created_at,
        )


class NotificationListResponse(PaginatedResponse):
    items: List[NotificationResponse]
    unread_count: int


class UnreadCountResponse(BaseModel):
    unread_count: int


class NotificationBulkResponse(BaseModel):
    """How many notifications a bulk operation touched."""

    count: int
