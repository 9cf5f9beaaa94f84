"""Get job use case."""

from typing import Optional
from uuid import UUID

from marketplace.application.interfaces.repositories import JobRepositoryInterface
from marketplace.application.use_cases.lookups import require_job
from marketplace.domain.entities.job import Job
from marketplace.domain.value_objects.principal import Principal
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import record_job_view


class GetJobUseCase:
    """Read a job and count the view.

    Views by an authenticated artist are also remembered per artist.
    """

    def __init__(
        self, job_repo: JobRepositoryInterface, transaction_service: TransactionService
    ):
        self.job_repo = job_repo
        self.transaction_service = transaction_service

    async def execute(self, job_id: UUID, viewer: Optional[Principal] = None) -> Job:
        artist_id = viewer.id if viewer is not None and viewer.is_artist else None

        async def _get() -> Job:
            job = await require_job(self.job_repo, job_id)
            if await self.job_repo.record_view(job.id, artist_id):
                job.views += 1
            return job

        job = await self.transaction_service.execute_in_transaction(_get)
        record_job_view(by_artist=artist_id is not None)
        return job
