"""Notification repository implementation."""

from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.repositories import (
    NotificationRepositoryInterface,
)
from marketplace.domain.entities.notification import Notification, NotificationType
from marketplace.domain.value_objects.job_status import JobPriority
from marketplace.infrastructure.database.models.notification import (
    NotificationModel,
)


class NotificationRepository(NotificationRepositoryInterface):
    """Notification repository implementation.

    Every inbox query is scoped to the recipient, so another user's
    notification reads as missing.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_many(self, notifications: List[Notification]) -> List[Notification]:
        """Bulk insert notifications."""
        if not notifications:
            return []

        self.db.add_all(
            [
                NotificationModel(
                    id=n.id,
                    recipient_id=n.recipient_id,
                    type=n.type.value,
                    title=n.title,
                    message=n.message,
                    related_job_id=n.related_job_id,
                    action_url=n.action_url,
                    deliver_in_app=n.deliver_in_app,
                    deliver_email=n.deliver_email,
                    priority=n.priority.value,
                    is_read=n.is_read,
                    read_at=n.read_at,
                    expires_at=n.expires_at,
                    created_at=n.created_at,
                    updated_at=n.created_at,
                )
                for n in notifications
            ]
        )
        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()
        return notifications

    async def list_for_recipient(
        self,
        recipient_id: UUID,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Notification], int]:
        """List a recipient's unexpired notifications, newest first."""
        conditions = self._inbox(recipient_id)
        if unread_only:
            conditions.append(NotificationModel.is_read.is_(False))
        if notification_type is not None:
            conditions.append(NotificationModel.type == notification_type.value)

        total = await self.db.scalar(
            select(func.count(NotificationModel.id)).where(*conditions)
        )
        stmt = (
            select(NotificationModel)
            .where(*conditions)
            .order_by(NotificationModel.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(m) for m in result.scalars().all()], total or 0

    async def count_unread(self, recipient_id: UUID) -> int:
        stmt = select(func.count(NotificationModel.id)).where(
            *self._inbox(recipient_id), NotificationModel.is_read.is_(False)
        )
        return await self.db.scalar(stmt) or 0

    async def mark_read(
        self, notification_id: UUID, recipient_id: UUID, read_at: datetime
    ) -> Optional[Notification]:
        """Mark one notification read, keeping the first read_at."""
        await self.db.execute(
            update(NotificationModel)
            .where(
                NotificationModel.id == notification_id,
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True, read_at=read_at, updated_at=read_at)
            .execution_options(synchronize_session=False)
        )

        stmt = (
            select(NotificationModel)
            .where(
                NotificationModel.id == notification_id,
                NotificationModel.recipient_id == recipient_id,
            )
            .execution_options(populate_existing=True)
        )
        model = (await self.db.execute(stmt)).scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def mark_all_read(self, recipient_id: UUID, read_at: datetime) -> int:
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True, read_at=read_at, updated_at=read_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def delete_for_recipient(self, notification_id: UUID, recipient_id: UUID) -> bool:
        stmt = delete(NotificationModel).where(
            NotificationModel.id == notification_id,
            NotificationModel.recipient_id == recipient_id,
        )
        result = await self.db.execute(stmt)
        return result.rowcount > 0

    async def delete_read(self, recipient_id: UUID) -> int:
        stmt = delete(NotificationModel).where(
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.is_read.is_(True),
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    @staticmethod
    def _inbox(recipient_id: UUID) -> list:
        return [
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.expires_at > datetime.now(timezone.utc),
        ]

    def _model_to_entity(self, model: NotificationModel) -> Notification:
        """Convert SQLAlchemy model to domain entity."""
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            related_job_id=model.related_job_id,
            action_url=model.action_url,
            deliver_in_app=model.deliver_in_app,
            deliver_email=model.deliver_email,
            priority=JobPriority(model.priority),
            is_read=model.is_read,
            read_at=model.read_at,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )
