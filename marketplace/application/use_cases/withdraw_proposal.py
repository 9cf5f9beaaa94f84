"""Withdraw proposal use case."""

from uuid import UUID

from marketplace.application.interfaces.repositories import ProposalRepositoryInterface
from marketplace.application.use_cases.lookups import require_proposal
from marketplace.config.logging import get_logger
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.value_objects.proposal_status import ProposalStatus
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import record_proposal_decision

logger = get_logger(__name__)


class WithdrawProposalUseCase:
    """Use case for an artist retracting a pending bid. The job is untouched."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.proposal_repo = proposal_repo
        self.transaction_service = transaction_service

    async def execute(self, proposal_id: UUID, artist_id: UUID) -> Proposal:
        async def _withdraw() -> Proposal:
            proposal = await require_proposal(self.proposal_repo, proposal_id)
            proposal.ensure_artist(artist_id)
            proposal.withdraw()
            return await self.proposal_repo.update(
                proposal, expected_status=ProposalStatus.PENDING
            )

        proposal = await self.transaction_service.execute_in_transaction(_withdraw)
        record_proposal_decision("withdrawn")
        logger.info("Proposal withdrawn", proposal_id=str(proposal.id))
        return proposal
