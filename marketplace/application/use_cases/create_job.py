"""Create job use case."""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from marketplace.application.interfaces.repositories import JobRepositoryInterface
from marketplace.application.interfaces.services import NotificationFanoutInterface
from marketplace.config.logging import get_logger
from marketplace.domain.entities.job import Job
from marketplace.domain.entities.notification import Notification
from marketplace.domain.events.job_created import JobCreated
from marketplace.domain.value_objects.budget import Budget
from marketplace.domain.value_objects.event_details import EventDetails, JobCategory
from marketplace.domain.value_objects.job_status import JobPriority
from marketplace.domain.value_objects.location import Location
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import record_job_creation

logger = get_logger(__name__)


@dataclass
class CreateJobRequest:
    """Request for creating a job."""

    client_id: UUID
    title: str
    description: str
    category: JobCategory
    event_details: EventDetails
    location: Location
    budget: Budget
    priority: JobPriority = JobPriority.MEDIUM
    accepting_applications: bool = True
    max_applications: int = 10


@dataclass
class CreateJobResult:
    """Result of job creation."""

    job: Job
    event: JobCreated
    notifications: List[Notification] = field(default_factory=list)


class CreateJobUseCase:
    """Use case for posting a job and announcing it to artists."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        notification_fanout: NotificationFanoutInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.notification_fanout = notification_fanout
        self.transaction_service = transaction_service

    async def execute(self, request: CreateJobRequest) -> CreateJobResult:
        """Validate and persist the job, then fan out notifications."""
        job = Job.create(
            client_id=request.client_id,
            title=request.title,
            description=request.description,
            category=request.category,
            event_details=request.event_details,
            location=request.location,
            budget=request.budget,
            priority=request.priority,
            accepting_applications=request.accepting_applications,
            max_applications=request.max_applications,
        )

        created_job = await self.transaction_service.execute_in_transaction(
            lambda: self.job_repo.create(job)
        )
        record_job_creation(created_job.category.value)

        event = JobCreated(
            job_id=created_job.id,
            client_id=created_job.client_id,
            created_at=created_job.created_at,
        )
        logger.info(
            "Job created",
            job_id=str(event.job_id),
            client_id=str(event.client_id),
            category=created_job.category.value,
            event_date=created_job.event_details.event_date.isoformat(),
        )

        # The job is committed; fan-out problems must not surface to the client.
        notifications = []
        try:
            notifications = await self.notification_fanout.notify_artists_of_new_job(
                created_job
            )
        except Exception as e:
            logger.error(
                "Notification fan-out failed for new job",
                job_id=str(created_job.id),
                error=str(e),
                exc_info=True,
            )

        return CreateJobResult(job=created_job, event=event, notifications=notifications)
