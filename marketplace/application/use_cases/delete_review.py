"""Delete review use case."""

from uuid import UUID

from marketplace.application.interfaces.repositories import ReviewRepositoryInterface
from marketplace.application.interfaces.services import RatingAggregatorInterface
from marketplace.application.use_cases.lookups import require_review
from marketplace.config.logging import get_logger
from marketplace.domain.exceptions.access_error import ForbiddenError
from marketplace.domain.value_objects.principal import Principal
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


class DeleteReviewUseCase:
    """Use case for physically removing a review (reviewer or moderator)."""

    def __init__(
        self,
        review_repo: ReviewRepositoryInterface,
        rating_aggregator: RatingAggregatorInterface,
        transaction_service: TransactionService,
    ):
        self.review_repo = review_repo
        self.rating_aggregator = rating_aggregator
        self.transaction_service = transaction_service

    async def execute(self, review_id: UUID, caller: Principal) -> None:
        async def _delete() -> UUID:
            review = await require_review(self.review_repo, review_id)
            if review.reviewer_id != caller.id and not caller.is_admin:
                raise ForbiddenError("Only the reviewer or a moderator can delete a review")
            await self.review_repo.delete(review.id)
            return review.reviewee_id

        reviewee_id = await self.transaction_service.execute_in_transaction(_delete)
        logger.info(
            "Review deleted", review_id=str(review_id), deleted_by=str(caller.id)
        )

        await self.rating_aggregator.recompute_quietly(reviewee_id)
