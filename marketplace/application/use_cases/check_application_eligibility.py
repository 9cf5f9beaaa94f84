"""Check application eligibility use case."""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from marketplace.application.interfaces.repositories import (
    JobRepositoryInterface,
    ProposalRepositoryInterface,
)
from marketplace.application.use_cases.lookups import require_job
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)


@dataclass
class EligibilityResult:
    """Whether an artist may apply, and why not."""

    job_id: UUID
    artist_id: UUID
    can_apply: bool
    reasons: List[str] = field(default_factory=list)


class CheckApplicationEligibilityUseCase:
    """Use case answering can_artist_apply for a job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        proposal_repo: ProposalRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.proposal_repo = proposal_repo
        self.transaction_service = transaction_service

    async def execute(self, job_id: UUID, artist_id: UUID) -> EligibilityResult:
        async def _check() -> EligibilityResult:
            job = await require_job(self.job_repo, job_id)
            existing = await self.proposal_repo.find_by_job_and_artist(job.id, artist_id)

            reasons = job.application_blockers()
            if existing is not None:
                reasons.append("You have already submitted a proposal for this job")

            return EligibilityResult(
                job_id=job.id,
                artist_id=artist_id,
                can_apply=job.can_artist_apply(already_applied=existing is not None),
                reasons=reasons,
            )

        return await self.transaction_service.execute_in_transaction(_check)
