"""Notification domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from marketplace.domain.value_objects.job_status import JobPriority

MAX_TITLE_LENGTH = 100
MAX_MESSAGE_LENGTH = 500


class NotificationType(str, Enum):
    NEW_JOB_POSTED = "new_job_posted"


@dataclass
class Notification:
    """In-app notification record produced by the fan-out."""

    recipient_id: UUID
    type: NotificationType
    title: str
    message: str
    id: UUID = field(default_factory=uuid4)
    related_job_id: Optional[UUID] = None
    action_url: Optional[str] = None
    deliver_in_app: bool = True
    deliver_email: bool = False
    priority: JobPriority = JobPriority.MEDIUM
    is_read: bool = False
    read_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    expiry_days: int = field(default=30, repr=False)

    def __post_init__(self):
        """Trim display text and default the expiry."""
        self.title = self.title[:MAX_TITLE_LENGTH]
        self.message = self.message[:MAX_MESSAGE_LENGTH]
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.expires_at:
            self.expires_at = self.created_at + timedelta(days=self.expiry_days)
