"""Reject proposal use case."""

from typing import Optional
from uuid import UUID

from marketplace.application.interfaces.repositories import (
    JobRepositoryInterface,
    ProposalRepositoryInterface,
)
from marketplace.application.use_cases.lookups import require_job, require_proposal
from marketplace.config.logging import get_logger
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.value_objects.proposal_status import ProposalStatus
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import record_proposal_decision

logger = get_logger(__name__)


class RejectProposalUseCase:
    """Use case for a client declining a pending proposal."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        proposal_repo: ProposalRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.proposal_repo = proposal_repo
        self.transaction_service = transaction_service

    async def execute(
        self, proposal_id: UUID, client_id: UUID, message: Optional[str] = None
    ) -> Proposal:
        async def _reject() -> Proposal:
            proposal = await require_proposal(self.proposal_repo, proposal_id)
            job = await require_job(self.job_repo, proposal.job_id)
            job.ensure_owner(client_id)
            proposal.reject(client_id, message)
            return await self.proposal_repo.update(
                proposal, expected_status=ProposalStatus.PENDING
            )

        proposal = await self.transaction_service.execute_in_transaction(_reject)
        record_proposal_decision("rejected")
        logger.info(
            "Proposal rejected",
            proposal_id=str(proposal.id),
            job_id=str(proposal.job_id),
        )
        return proposal
