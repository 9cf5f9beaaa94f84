"""Shared lookups and side effects for use cases."""

from uuid import UUID

from marketplace.application.interfaces.repositories import (
    JobRepositoryInterface,
    ProposalRepositoryInterface,
    ReviewRepositoryInterface,
)
from marketplace.application.interfaces.services import RatingAggregatorInterface
from marketplace.domain.entities.job import Job
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.entities.review import Review
from marketplace.domain.exceptions.access_error import NotFoundError


async def require_job(job_repo: JobRepositoryInterface, job_id: UUID) -> Job:
    job = await job_repo.get_by_id(job_id)
    if job is None:
        raise NotFoundError("Job", job_id)
    return job


async def require_proposal(
    proposal_repo: ProposalRepositoryInterface, proposal_id: UUID
) -> Proposal:
    proposal = await proposal_repo.get_by_id(proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal", proposal_id)
    return proposal


async def require_review(
    review_repo: ReviewRepositoryInterface, review_id: UUID
) -> Review:
    review = await review_repo.get_by_id(review_id)
    if review is None:
        raise NotFoundError("Review", review_id)
    return review


async def refresh_rating_on_publication_change(
    rating_aggregator: RatingAggregatorInterface, review: Review, was_published: bool
) -> bool:
    """Recompute the reviewee's rating when a committed review entered or left published."""
    if review.is_published == was_published:
        return False
    await rating_aggregator.recompute_quietly(review.reviewee_id)
    return True
