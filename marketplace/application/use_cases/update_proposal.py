"""Update proposal use case."""

from uuid import UUID

from marketplace.application.interfaces.repositories import ProposalRepositoryInterface
from marketplace.application.use_cases.lookups import require_proposal
from marketplace.config.logging import get_logger
from marketplace.domain.entities.proposal import Proposal, ProposalBid
from marketplace.domain.value_objects.proposal_status import ProposalStatus
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


class UpdateProposalUseCase:
    """Use case for an artist revising a pending bid."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.proposal_repo = proposal_repo
        self.transaction_service = transaction_service

    async def execute(
        self, proposal_id: UUID, artist_id: UUID, bid: ProposalBid
    ) -> Proposal:
        async def _update() -> Proposal:
            proposal = await require_proposal(self.proposal_repo, proposal_id)
            proposal.ensure_artist(artist_id)
            proposal.revise(bid)
            return await self.proposal_repo.update(
                proposal, expected_status=ProposalStatus.PENDING
            )

        proposal = await self.transaction_service.execute_in_transaction(_update)
        logger.info("Proposal updated", proposal_id=str(proposal.id))
        return proposal
