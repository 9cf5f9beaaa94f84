"""Delete job use case."""

from uuid import UUID

from marketplace.application.interfaces.repositories import JobRepositoryInterface
from marketplace.application.use_cases.lookups import require_job
from marketplace.config.logging import get_logger
from marketplace.domain.exceptions.lifecycle_error import InvalidStateError
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


class DeleteJobUseCase:
    """Use case for an owner removing a job that was never assigned."""

    def __init__(
        self, job_repo: JobRepositoryInterface, transaction_service: TransactionService
    ):
        self.job_repo = job_repo
        self.transaction_service = transaction_service

    async def execute(self, job_id: UUID, client_id: UUID) -> None:
        async def _delete() -> None:
            job = await require_job(self.job_repo, job_id)
            job.ensure_owner(client_id)
            if not job.can_be_deleted():
                reason = (
                    "it has received proposals"
                    if job.received_proposal_ids
                    else f"it is {job.status.value}"
                )
                raise InvalidStateError(
                    f"Job cannot be deleted because {reason}; cancel it instead",
                    current_status=job.status.value,
                )
            await self.job_repo.delete(job.id)

        await self.transaction_service.execute_in_transaction(_delete)
        logger.info("Job deleted", job_id=str(job_id), client_id=str(client_id))
