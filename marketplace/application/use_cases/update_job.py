"""Update job use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from marketplace.application.interfaces.repositories import JobRepositoryInterface
from marketplace.application.use_cases.lookups import require_job
from marketplace.config.logging import get_logger
from marketplace.domain.entities.job import Job
from marketplace.domain.value_objects.budget import Budget
from marketplace.domain.value_objects.event_details import EventDetails, JobCategory
from marketplace.domain.value_objects.job_status import JobPriority
from marketplace.domain.value_objects.location import Location
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class UpdateJobRequest:
    """Owner edits; None leaves a field unchanged."""

    job_id: UUID
    client_id: UUID
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[JobCategory] = None
    event_details: Optional[EventDetails] = None
    location: Optional[Location] = None
    budget: Optional[Budget] = None
    priority: Optional[JobPriority] = None
    accepting_applications: Optional[bool] = None
    max_applications: Optional[int] = None

    def changes(self) -> dict:
        fields = (
            "title",
            "description",
            "category",
            "event_details",
            "location",
            "budget",
            "priority",
            "accepting_applications",
            "max_applications",
        )
        return {
            name: getattr(self, name)
            for name in fields
            if getattr(self, name) is not None
        }


class UpdateJobUseCase:
    """Use case for owner edits of a job still open for bidding."""

    def __init__(
        self, job_repo: JobRepositoryInterface, transaction_service: TransactionService
    ):
        self.job_repo = job_repo
        self.transaction_service = transaction_service

    async def execute(self, request: UpdateJobRequest) -> Job:
        async def _update() -> Job:
            job = await require_job(self.job_repo, request.job_id)
            job.ensure_owner(request.client_id)
            expected_status = job.status
            job.update_details(**request.changes())
            return await self.job_repo.update(job, expected_status=expected_status)

        job = await self.transaction_service.execute_in_transaction(_update)
        logger.info(
            "Job updated",
            job_id=str(job.id),
            fields=sorted(request.changes()),
        )
        return job
