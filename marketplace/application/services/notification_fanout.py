"""
Notification fan-out for new job postings.
"""

from typing import List

from marketplace.application.interfaces.repositories import (
    NotificationRepositoryInterface,
    UserRepositoryInterface,
)
from marketplace.application.interfaces.services import NotificationFanoutInterface
from marketplace.config.logging import get_logger
from marketplace.config.settings import settings
from marketplace.domain.entities.job import Job
from marketplace.domain.entities.notification import Notification, NotificationType
from marketplace.domain.value_objects.job_status import JobPriority
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import record_notifications

logger = get_logger(__name__)


class NotificationFanout(NotificationFanoutInterface):
    """Produces one in-app notification per subscribed artist."""

    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        notification_repo: NotificationRepositoryInterface,
        transaction_service: TransactionService,
        expiry_days: int = None,
    ):
        self.user_repo = user_repo
        self.notification_repo = notification_repo
        self.transaction_service = transaction_service
        self.expiry_days = expiry_days or settings.NOTIFICATION_EXPIRY_DAYS

    def build_notification(self, job: Job, recipient) -> Notification:
        budget = job.budget
        return Notification(
            recipient_id=recipient.id,
            type=NotificationType.NEW_JOB_POSTED,
            title=f"New {job.category.value} job available",
            message=(
                f"A new {job.category.value} job for "
                f"{job.event_details.event_type.value} has been posted in "
                f"{job.location.city}. Budget: {budget.currency.value} "
                f"{budget.min}-{budget.max}"
            ),
            related_job_id=job.id,
            action_url=f"/jobs/{job.id}",
            deliver_in_app=True,
            deliver_email=recipient.email_new_jobs,
            priority=(
                JobPriority.URGENT
                if job.priority == JobPriority.URGENT
                else JobPriority.MEDIUM
            ),
            expiry_days=self.expiry_days,
        )

    async def notify_artists_of_new_job(self, job: Job) -> List[Notification]:
        async def _fan_out() -> List[Notification]:
            recipients = await self.user_repo.find_new_job_subscribers()
            if not recipients:
                return []
            notifications = [self.build_notification(job, r) for r in recipients]
            return await self.notification_repo.create_many(notifications)

        created = await self.transaction_service.execute_in_transaction(_fan_out)
        record_notifications(NotificationType.NEW_JOB_POSTED.value, len(created))

        logger.info(
            "New job notifications created",
            job_id=str(job.id),
            recipients=len(created),
        )
        return created
