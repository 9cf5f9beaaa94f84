"""Accept proposal use case."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from marketplace.application.interfaces.repositories import (
    JobRepositoryInterface,
    ProposalRepositoryInterface,
)
from marketplace.application.use_cases.lookups import require_job, require_proposal
from marketplace.config.logging import get_logger
from marketplace.domain.entities.job import Job
from marketplace.domain.entities.proposal import SIBLING_REJECTION_MESSAGE, Proposal
from marketplace.domain.events.proposal_accepted import ProposalAccepted
from marketplace.domain.exceptions.lifecycle_error import InvalidStateError
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import (
    record_accept_conflict,
    record_proposal_decision,
)

logger = get_logger(__name__)


@dataclass
class AcceptProposalResult:
    """Result of accepting a proposal."""

    proposal: Proposal
    job: Job
    event: ProposalAccepted


class AcceptProposalUseCase:
    """Use case for a client choosing the winning proposal of a job.

    Everything happens in one transaction. The job-status compare-and-swap
    is the point where concurrent accepts are ordered: only one caller can
    move the job to assigned, every other one gets InvalidStateError and
    its transaction is rolled back.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        proposal_repo: ProposalRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.proposal_repo = proposal_repo
        self.transaction_service = transaction_service

    async def execute(self, proposal_id: UUID, client_id: UUID) -> AcceptProposalResult:
        async def _accept() -> AcceptProposalResult:
            proposal = await require_proposal(self.proposal_repo, proposal_id)
            job = await require_job(self.job_repo, proposal.job_id)
            job.ensure_owner(client_id)

            now = datetime.now(timezone.utc)
            proposal.accept(client_id, now)
            job.assign_artist(proposal.artist_id, proposal.id)

            if not await self.job_repo.assign_if_biddable(
                job.id, proposal.artist_id, proposal.id
            ):
                record_accept_conflict()
                raise InvalidStateError(
                    "Job is no longer open for assignment",
                    current_status=job.status.value,
                )

            if not await self.proposal_repo.accept_if_pending(
                proposal.id, client_id, now
            ):
                raise InvalidStateError("Proposal is no longer pending")

            rejected_ids = await self.proposal_repo.reject_pending_siblings(
                job_id=job.id,
                accepted_proposal_id=proposal.id,
                client_id=client_id,
                message=SIBLING_REJECTION_MESSAGE,
                responded_at=now,
            )

            event = ProposalAccepted(
                job_id=job.id,
                proposal_id=proposal.id,
                artist_id=proposal.artist_id,
                accepted_at=now,
                rejected_proposal_ids=rejected_ids,
            )
            return AcceptProposalResult(proposal=proposal, job=job, event=event)

        result = await self.transaction_service.execute_in_transaction(_accept)
        record_proposal_decision("accepted")
        if result.event.rejected_proposal_ids:
            record_proposal_decision("rejected")

        logger.info(
            "Proposal accepted",
            job_id=str(result.event.job_id),
            proposal_id=str(result.event.proposal_id),
            artist_id=str(result.event.artist_id),
            rejected_count=len(result.event.rejected_proposal_ids),
        )
        return result
