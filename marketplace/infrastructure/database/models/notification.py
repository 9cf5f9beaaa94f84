"""
Notification SQLAlchemy model.
"""

from sqlalchemy import Boolean, Column, Index, String, Uuid

from marketplace.domain.value_objects.job_status import JobPriority

from .base import BaseModel, UTCDateTime


class NotificationModel(BaseModel):
    """Notification database model."""

    __tablename__ = "notifications"

    recipient_id = Column(Uuid, nullable=False)
    type = Column(String(40), nullable=False)
    title = Column(String(100), nullable=False)
    message = Column(String(500), nullable=False)
    related_job_id = Column(Uuid)
    action_url = Column(String(255))
    deliver_in_app = Column(Boolean, default=True, nullable=False)
    deliver_email = Column(Boolean, default=False, nullable=False)
    priority = Column(String(10), default=JobPriority.MEDIUM.value, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(UTCDateTime(timezone=True))
    expires_at = Column(UTCDateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (
        Index("idx_notifications_recipient_read", "recipient_id", "is_read"),
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, recipient_id={self.recipient_id})>"
