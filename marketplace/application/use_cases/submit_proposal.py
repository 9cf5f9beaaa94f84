"""Submit proposal use case."""

from dataclasses import dataclass
from uuid import UUID

from marketplace.application.interfaces.repositories import (
    JobRepositoryInterface,
    ProposalRepositoryInterface,
)
from marketplace.application.use_cases.lookups import require_job
from marketplace.config.logging import get_logger
from marketplace.domain.entities.proposal import Proposal, ProposalBid
from marketplace.domain.exceptions.lifecycle_error import (
    ConflictError,
    InvalidStateError,
)
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import record_proposal_submission

logger = get_logger(__name__)


@dataclass
class SubmitProposalRequest:
    """Request for submitting a proposal."""

    job_id: UUID
    artist_id: UUID
    bid: ProposalBid


class SubmitProposalUseCase:
    """Use case for an artist bidding on an open job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        proposal_repo: ProposalRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.proposal_repo = proposal_repo
        self.transaction_service = transaction_service

    async def execute(self, request: SubmitProposalRequest) -> Proposal:
        proposal = Proposal.submit(request.job_id, request.artist_id, request.bid)

        async def _submit() -> Proposal:
            job = await require_job(self.job_repo, request.job_id)

            blockers = job.application_blockers()
            if blockers:
                raise InvalidStateError(
                    f"This job is no longer accepting applications: {blockers[0]}",
                    current_status=job.status.value,
                )

            existing = await self.proposal_repo.find_by_job_and_artist(
                job.id, request.artist_id
            )
            if existing is not None:
                raise ConflictError("You have already submitted a proposal for this job")

            # Bounded increment; a concurrent submission may have taken the last slot.
            if not await self.job_repo.claim_application_slot(job.id):
                raise InvalidStateError(
                    "Job has reached its maximum number of applications",
                    current_status=job.status.value,
                )

            created = await self.proposal_repo.create(proposal)
            job.register_proposal(created.id)
            return created

        created = await self.transaction_service.execute_in_transaction(_submit)
        record_proposal_submission()

        logger.info(
            "Proposal submitted",
            proposal_id=str(created.id),
            job_id=str(created.job_id),
            artist_id=str(created.artist_id),
            total_price=str(created.bid.pricing.total_price),
        )
        return created
