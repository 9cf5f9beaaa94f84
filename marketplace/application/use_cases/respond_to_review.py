"""Respond to review use case."""

from uuid import UUID

from marketplace.application.interfaces.repositories import ReviewRepositoryInterface
from marketplace.application.interfaces.services import RatingAggregatorInterface
from marketplace.application.use_cases.lookups import (
    refresh_rating_on_publication_change,
    require_review,
)
from marketplace.config.logging import get_logger
from marketplace.domain.entities.review import Review
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


class RespondToReviewUseCase:
    """Use case for the reviewed artist replying publicly."""

    def __init__(
        self,
        review_repo: ReviewRepositoryInterface,
        rating_aggregator: RatingAggregatorInterface,
        transaction_service: TransactionService,
    ):
        self.review_repo = review_repo
        self.rating_aggregator = rating_aggregator
        self.transaction_service = transaction_service

    async def execute(
        self, review_id: UUID, artist_id: UUID, message: str, is_public: bool = True
    ) -> Review:
        was_published = False

        async def _respond() -> Review:
            nonlocal was_published
            review = await require_review(self.review_repo, review_id)
            was_published = review.is_published
            review.respond(artist_id, message, is_public)
            return await self.review_repo.update(review)

        review = await self.transaction_service.execute_in_transaction(_respond)
        logger.info("Artist responded to review", review_id=str(review.id))

        await refresh_rating_on_publication_change(
            self.rating_aggregator, review, was_published
        )
        return review
