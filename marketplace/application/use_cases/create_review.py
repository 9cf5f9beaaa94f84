"""Create review use case."""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from marketplace.application.interfaces.repositories import (
    JobRepositoryInterface,
    ReviewRepositoryInterface,
)
from marketplace.application.interfaces.services import RatingAggregatorInterface
from marketplace.application.use_cases.lookups import (
    refresh_rating_on_publication_change,
    require_job,
)
from marketplace.config.logging import get_logger
from marketplace.domain.entities.review import Review
from marketplace.domain.exceptions.access_error import ForbiddenError
from marketplace.domain.exceptions.lifecycle_error import (
    ConflictError,
    InvalidStateError,
)
from marketplace.domain.value_objects.job_status import JobStatus
from marketplace.domain.value_objects.review_content import (
    ReviewExperience,
    ReviewImage,
    ReviewRating,
)
from marketplace.domain.value_objects.review_status import (
    ReviewVisibility,
    VerificationMethod,
)
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import record_review_creation

logger = get_logger(__name__)


@dataclass
class CreateReviewRequest:
    """Request for creating a review."""

    reviewer_id: UUID
    job_id: UUID
    rating: ReviewRating
    comment: str
    title: Optional[str] = None
    images: List[ReviewImage] = field(default_factory=list)
    experience: ReviewExperience = field(default_factory=ReviewExperience)
    visibility: ReviewVisibility = ReviewVisibility.PUBLIC


class CreateReviewUseCase:
    """Use case for a client reviewing the artist of a completed job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        review_repo: ReviewRepositoryInterface,
        rating_aggregator: RatingAggregatorInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.review_repo = review_repo
        self.rating_aggregator = rating_aggregator
        self.transaction_service = transaction_service

    async def execute(self, request: CreateReviewRequest) -> Review:
        async def _create() -> Review:
            job = await require_job(self.job_repo, request.job_id)
            if not job.is_owned_by(request.reviewer_id):
                raise ForbiddenError("Not authorized to review this job")
            if job.status != JobStatus.COMPLETED or job.assigned_artist_id is None:
                raise InvalidStateError(
                    "Can only review completed jobs", current_status=job.status.value
                )
            if await self.review_repo.exists_for_reviewer_and_job(
                request.reviewer_id, job.id
            ):
                raise ConflictError("You have already reviewed this job")

            # A job with a selected proposal went through a confirmed booking.
            verification = (
                VerificationMethod.BOOKING_CONFIRMED
                if job.selected_proposal_id is not None
                else None
            )
            review = Review.create(
                reviewer_id=request.reviewer_id,
                reviewee_id=job.assigned_artist_id,
                job_id=job.id,
                proposal_id=job.selected_proposal_id,
                rating=request.rating,
                comment=request.comment,
                title=request.title,
                images=request.images,
                experience=request.experience,
                visibility=request.visibility,
                verification_method=verification,
            )
            return await self.review_repo.create(review)

        review = await self.transaction_service.execute_in_transaction(_create)
        record_review_creation(review.status.value)

        logger.info(
            "Review created",
            review_id=str(review.id),
            job_id=str(review.job_id),
            reviewee_id=str(review.reviewee_id),
            quality_score=review.quality_score,
            status=review.status.value,
        )

        await refresh_rating_on_publication_change(
            self.rating_aggregator, review, was_published=False
        )
        return review
