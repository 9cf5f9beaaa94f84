"""Proposal read use cases."""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional
from uuid import UUID

from marketplace.application.interfaces.repositories import (
    JobRepositoryInterface,
    ProposalRepositoryInterface,
)
from marketplace.application.use_cases.lookups import require_job, require_proposal
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.exceptions.access_error import ForbiddenError
from marketplace.domain.value_objects.proposal_status import ProposalStatus
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)


@dataclass
class ProposalPage:
    """One page of an artist's proposals."""

    items: List[Proposal]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class ProposalQueries:
    """Read-side operations on proposals with their access rules."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        proposal_repo: ProposalRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.proposal_repo = proposal_repo
        self.transaction_service = transaction_service

    async def get_proposal(self, proposal_id: UUID, caller_id: UUID) -> Proposal:
        """Visible to the proposing artist and the job owner."""

        async def _get() -> Proposal:
            proposal = await require_proposal(self.proposal_repo, proposal_id)
            if proposal.artist_id == caller_id:
                return proposal
            job = await require_job(self.job_repo, proposal.job_id)
            if not job.is_owned_by(caller_id):
                raise ForbiddenError("Access denied")
            return proposal

        return await self.transaction_service.execute_in_transaction(_get)

    async def list_job_proposals(
        self,
        job_id: UUID,
        client_id: UUID,
        status: Optional[ProposalStatus] = None,
        limit: Optional[int] = None,
    ) -> List[Proposal]:
        async def _list() -> List[Proposal]:
            job = await require_job(self.job_repo, job_id)
            if not job.is_owned_by(client_id):
                raise ForbiddenError("Access denied")
            return await self.proposal_repo.list_by_job(job.id, status=status, limit=limit)

        return await self.transaction_service.execute_in_transaction(_list)

    async def list_artist_proposals(
        self,
        artist_id: UUID,
        status: Optional[ProposalStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> ProposalPage:
        items, total = await self.proposal_repo.list_by_artist(
            artist_id, status=status, skip=(page - 1) * limit, limit=limit
        )
        return ProposalPage(items=items, total=total, page=page, limit=limit)

    async def artist_stats(self, artist_id: UUID) -> Dict[str, int]:
        counts = await self.proposal_repo.count_by_status(artist_id)
        stats = {status.value: counts.get(status.value, 0) for status in ProposalStatus}
        stats["total"] = sum(stats.values())
        return stats
