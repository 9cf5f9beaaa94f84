"""Notification inbox use cases."""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from marketplace.application.interfaces.repositories import (
    NotificationRepositoryInterface,
)
from marketplace.config.logging import get_logger
from marketplace.domain.entities.notification import Notification, NotificationType
from marketplace.domain.exceptions.access_error import NotFoundError
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class NotificationPage:
    """One page of a recipient's notifications."""

    items: List[Notification]
    total: int
    unread_count: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class NotificationInbox:
    """Recipient-scoped reads and housekeeping over in-app notifications."""

    def __init__(
        self,
        notification_repo: NotificationRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.notification_repo = notification_repo
        self.transaction_service = transaction_service

    async def list_notifications(
        self,
        recipient_id: UUID,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
        page: int = 1,
        limit: int = 20,
    ) -> NotificationPage:
        items, total = await self.notification_repo.list_for_recipient(
            recipient_id,
            unread_only=unread_only,
            notification_type=notification_type,
            skip=(page - 1) * limit,
            limit=limit,
        )
        unread = await self.notification_repo.count_unread(recipient_id)
        return NotificationPage(
            items=items, total=total, unread_count=unread, page=page, limit=limit
        )

    async def unread_count(self, recipient_id: UUID) -> int:
        return await self.notification_repo.count_unread(recipient_id)

    async def mark_read(self, notification_id: UUID, recipient_id: UUID) -> Notification:
        async def _mark() -> Notification:
            notification = await self.notification_repo.mark_read(
                notification_id, recipient_id, datetime.now(timezone.utc)
            )
            if notification is None:
                raise NotFoundError("Notification", notification_id)
            return notification

        return await self.transaction_service.execute_in_transaction(_mark)

    async def mark_all_read(self, recipient_id: UUID) -> int:
        async def _mark_all() -> int:
            return await self.notification_repo.mark_all_read(
                recipient_id, datetime.now(timezone.utc)
            )

        count = await self.transaction_service.execute_in_transaction(_mark_all)
        logger.info("Notifications marked read", recipient_id=str(recipient_id), count=count)
        return count

    async def delete(self, notification_id: UUID, recipient_id: UUID) -> None:
        """Delete one notification; another user's reads as missing."""

        async def _delete() -> None:
            deleted = await self.notification_repo.delete_for_recipient(
                notification_id, recipient_id
            )
            if not deleted:
                raise NotFoundError("Notification", notification_id)

        await self.transaction_service.execute_in_transaction(_delete)

    async def clear_read(self, recipient_id: UUID) -> int:
        async def _clear() -> int:
            return await self.notification_repo.delete_read(recipient_id)

        count = await self.transaction_service.execute_in_transaction(_clear)
        logger.info("Read notifications cleared", recipient_id=str(recipient_id), count=count)
        return count
