"""Change job status use case."""

from uuid import UUID

from marketplace.application.interfaces.repositories import JobRepositoryInterface
from marketplace.application.use_cases.lookups import require_job
from marketplace.config.logging import get_logger
from marketplace.domain.entities.job import Job
from marketplace.domain.value_objects.job_status import JobStatus
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


class ChangeJobStatusUseCase:
    """Use case for owner-driven job transitions (start, complete, cancel, open)."""

    def __init__(
        self, job_repo: JobRepositoryInterface, transaction_service: TransactionService
    ):
        self.job_repo = job_repo
        self.transaction_service = transaction_service

    async def execute(self, job_id: UUID, client_id: UUID, target: JobStatus) -> Job:
        async def _change() -> Job:
            job = await require_job(self.job_repo, job_id)
            job.ensure_owner(client_id)
            previous = job.status
            job.transition_to(target)
            updated = await self.job_repo.update(job, expected_status=previous)
            logger.info(
                "Job status changed",
                job_id=str(job.id),
                from_status=previous.value,
                to_status=target.value,
            )
            return updated

        return await self.transaction_service.execute_in_transaction(_change)
