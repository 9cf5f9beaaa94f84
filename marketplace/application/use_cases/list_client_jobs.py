"""List client jobs use case."""

import math
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from marketplace.application.interfaces.repositories import JobRepositoryInterface
from marketplace.domain.entities.job import Job
from marketplace.domain.value_objects.job_status import JobStatus
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)


@dataclass
class JobPage:
    """One page of a client's jobs."""

    items: List[Job]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class ListClientJobsUseCase:
    """Page through the jobs a client posted, newest first.

    Open jobs whose event date has passed are expired as part of the read.
    """

    def __init__(
        self, job_repo: JobRepositoryInterface, transaction_service: TransactionService
    ):
        self.job_repo = job_repo
        self.transaction_service = transaction_service

    async def execute(
        self,
        client_id: UUID,
        status: Optional[JobStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> JobPage:
        async def _list() -> JobPage:
            items, total = await self.job_repo.list_by_client(
                client_id, status=status, skip=(page - 1) * limit, limit=limit
            )
            return JobPage(items=items, total=total, page=page, limit=limit)

        return await self.transaction_service.execute_in_transaction(_list)
