"""Review moderation use cases: moderator decisions and user flags."""

from typing import Optional
from uuid import UUID

from marketplace.application.interfaces.repositories import ReviewRepositoryInterface
from marketplace.application.interfaces.services import RatingAggregatorInterface
from marketplace.application.use_cases.lookups import (
    refresh_rating_on_publication_change,
    require_review,
)
from marketplace.config.logging import get_logger
from marketplace.domain.entities.review import Review
from marketplace.domain.exceptions.access_error import ForbiddenError
from marketplace.domain.value_objects.principal import Principal
from marketplace.domain.value_objects.review_status import FlagType, ModerationAction
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


class ModerateReviewUseCase:
    """Use case for moderators approving, rejecting or hiding a review."""

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
        self,
        review_id: UUID,
        moderator: Principal,
        action: ModerationAction,
        notes: Optional[str] = None,
    ) -> Review:
        if not moderator.is_admin:
            raise ForbiddenError("Only moderators can moderate reviews")

        was_published = False

        async def _moderate() -> Review:
            nonlocal was_published
            review = await require_review(self.review_repo, review_id)
            was_published = review.is_published
            review.moderate(moderator.id, action, notes)
            return await self.review_repo.update(review)

        review = await self.transaction_service.execute_in_transaction(_moderate)
        logger.info(
            "Review moderated",
            review_id=str(review.id),
            moderator_id=str(moderator.id),
            action=action.value,
            status=review.status.value,
        )

        await refresh_rating_on_publication_change(
            self.rating_aggregator, review, was_published
        )
        return review


class FlagReviewUseCase:
    """Use case for reporting a review; a published review is demoted to flagged."""

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
        self,
        review_id: UUID,
        reporter_id: UUID,
        flag_type: FlagType,
        reason: Optional[str] = None,
    ) -> Review:
        was_published = False

        async def _flag() -> Review:
            nonlocal was_published
            review = await require_review(self.review_repo, review_id)
            was_published = review.is_published
            review.flag(reporter_id, flag_type, reason)
            return await self.review_repo.update(review)

        review = await self.transaction_service.execute_in_transaction(_flag)
        logger.info(
            "Review flagged",
            review_id=str(review.id),
            reporter_id=str(reporter_id),
            flag_type=flag_type.value,
            status=review.status.value,
        )

        await refresh_rating_on_publication_change(
            self.rating_aggregator, review, was_published
        )
        return review
