"""Review repository implementation."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import case, delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.repositories import ReviewRepositoryInterface
from marketplace.config.logging import get_logger
from marketplace.domain.entities.review import Review
from marketplace.domain.exceptions.access_error import NotFoundError
from marketplace.domain.exceptions.lifecycle_error import ConflictError
from marketplace.domain.value_objects.artist_rating import ArtistRating
from marketplace.domain.value_objects.review_content import (
    ArtistResponse,
    DesignSatisfaction,
    Moderation,
    RatingBreakdown,
    ReviewExperience,
    ReviewFlag,
    ReviewImage,
    ReviewRating,
)
from marketplace.domain.value_objects.review_status import (
    FlagType,
    ReviewStatus,
    ReviewVisibility,
    VerificationMethod,
)
from marketplace.infrastructure.database.models.review import ReviewModel

logger = get_logger(__name__)


class ReviewRepository(ReviewRepositoryInterface):
    """Review repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, review_id: UUID) -> Optional[Review]:
        """Get review by ID."""
        model = await self._get_model(review_id)
        return self._model_to_entity(model) if model else None

    async def exists_for_reviewer_and_job(self, reviewer_id: UUID, job_id: UUID) -> bool:
        stmt = select(
            exists().where(
                ReviewModel.reviewer_id == reviewer_id,
                ReviewModel.job_id == job_id,
            )
        )
        return bool(await self.db.scalar(stmt))

    async def create(self, review: Review) -> Review:
        """Create a new review."""
        review_model = ReviewModel(
            id=review.id,
            reviewer_id=review.reviewer_id,
            reviewee_id=review.reviewee_id,
            job_id=review.job_id,
            proposal_id=review.proposal_id,
            created_at=review.created_at,
        )
        self._apply(review_model, review)

        self.db.add(review_model)
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.info(
                "Duplicate review rejected by unique index",
                reviewer_id=str(review.reviewer_id),
                job_id=str(review.job_id),
                error=str(e.orig),
            )
            raise ConflictError("You have already reviewed this job") from e

        return self._model_to_entity(review_model)

    async def update(self, review: Review) -> Review:
        """Update an existing review."""
        review_model = await self._get_model(review.id)
        if not review_model:
            raise NotFoundError("Review", review.id)

        self._apply(review_model, review)
        await self.db.flush()

        return self._model_to_entity(review_model)

    async def delete(self, review_id: UUID) -> bool:
        result = await self.db.execute(
            delete(ReviewModel).where(ReviewModel.id == review_id)
        )
        return result.rowcount > 0

    async def list_published_for_artist(
        self, artist_id: UUID, skip: int = 0, limit: int = 10
    ) -> List[Review]:
        stmt = (
            select(ReviewModel)
            .where(
                ReviewModel.reviewee_id == artist_id,
                ReviewModel.status == ReviewStatus.PUBLISHED.value,
                ReviewModel.visibility != ReviewVisibility.PRIVATE.value,
            )
            .order_by(ReviewModel.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def published_rating_totals(self, artist_id: UUID) -> Tuple[int, int]:
        stmt = select(
            func.coalesce(func.sum(ReviewModel.rating_overall), 0),
            func.count(ReviewModel.id),
        ).where(
            ReviewModel.reviewee_id == artist_id,
            ReviewModel.status == ReviewStatus.PUBLISHED.value,
        )
        total, count = (await self.db.execute(stmt)).one()
        return int(total), int(count)

    async def artist_stats(self, artist_id: UUID) -> Dict:
        """Count, average, 1-5 distribution and recommendation rate."""
        published = (
            ReviewModel.reviewee_id == artist_id,
            ReviewModel.status == ReviewStatus.PUBLISHED.value,
        )

        distribution = {star: 0 for star in range(1, 6)}
        rows = await self.db.execute(
            select(ReviewModel.rating_overall, func.count(ReviewModel.id))
            .where(*published)
            .group_by(ReviewModel.rating_overall)
        )
        for star, count in rows.all():
            distribution[int(star)] = int(count)

        answered, recommended = (
            await self.db.execute(
                select(
                    func.count(ReviewModel.would_recommend),
                    func.coalesce(
                        func.sum(case((ReviewModel.would_recommend.is_(True), 1), else_=0)),
                        0,
                    ),
                ).where(*published)
            )
        ).one()

        total = sum(distribution.values())
        rating = ArtistRating.from_totals(
            sum(star * count for star, count in distribution.items()), total
        )
        recommendation_rate = None
        if answered:
            recommendation_rate = (
                Decimal(int(recommended) * 100) / Decimal(int(answered))
            ).quantize(Decimal("1"), rounding=ROUND_HALF_UP)

        return {
            "total_reviews": total,
            "average_rating": rating.average,
            "rating_distribution": distribution,
            "recommendation_rate": recommendation_rate,
        }

    async def _get_model(self, review_id: UUID) -> Optional[ReviewModel]:
        stmt = select(ReviewModel).where(ReviewModel.id == review_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _apply(model: ReviewModel, review: Review) -> None:
        """Copy mutable entity state onto the row."""
        model.rating_overall = review.rating.overall
        model.rating_breakdown = review.rating.breakdown.rated()
        model.title = review.title
        model.comment = review.comment
        model.images = [
            {"url": image.url, "description": image.description}
            for image in review.images
        ]

        experience = review.experience
        model.would_recommend = experience.would_recommend
        model.would_hire_again = experience.would_hire_again
        model.design_satisfaction = (
            experience.design_satisfaction.value
            if experience.design_satisfaction
            else None
        )
        model.service_highlights = list(experience.service_highlights)
        model.areas_for_improvement = list(experience.areas_for_improvement)

        model.status = review.status.value
        model.visibility = review.visibility.value
        model.verification_method = (
            review.verification_method.value if review.verification_method else None
        )
        model.is_verified = review.is_verified
        model.quality_score = review.quality_score
        model.is_high_quality = review.is_high_quality

        moderation = review.moderation
        model.is_moderated = moderation.is_moderated
        model.moderated_by = moderation.moderated_by
        model.moderated_at = moderation.moderated_at
        model.moderation_notes = moderation.notes
        model.flags = [
            {
                "type": flag.type.value,
                "reported_by": str(flag.reported_by),
                "reported_at": flag.reported_at.isoformat(),
                "reason": flag.reason,
            }
            for flag in moderation.flags
        ]

        response = review.artist_response
        model.response_message = response.message if response else None
        model.response_at = response.responded_at if response else None
        model.response_is_public = response.is_public if response else None

        model.updated_at = review.updated_at

    def _model_to_entity(self, model: ReviewModel) -> Review:
        """Convert SQLAlchemy model to domain entity."""
        artist_response = None
        if model.response_message:
            artist_response = ArtistResponse(
                message=model.response_message,
                responded_at=model.response_at,
                is_public=bool(model.response_is_public),
            )

        return Review(
            id=model.id,
            reviewer_id=model.reviewer_id,
            reviewee_id=model.reviewee_id,
            job_id=model.job_id,
            proposal_id=model.proposal_id,
            rating=ReviewRating(
                overall=model.rating_overall,
                breakdown=RatingBreakdown(**(model.rating_breakdown or {})),
            ),
            title=model.title,
            comment=model.comment,
            images=[
                ReviewImage(url=image["url"], description=image.get("description"))
                for image in model.images or []
            ],
            experience=ReviewExperience(
                would_recommend=model.would_recommend,
                would_hire_again=model.would_hire_again,
                design_satisfaction=(
                    DesignSatisfaction(model.design_satisfaction)
                    if model.design_satisfaction
                    else None
                ),
                service_highlights=tuple(model.service_highlights or ()),
                areas_for_improvement=tuple(model.areas_for_improvement or ()),
            ),
            status=ReviewStatus(model.status),
            visibility=ReviewVisibility(model.visibility),
            verification_method=(
                VerificationMethod(model.verification_method)
                if model.verification_method
                else None
            ),
            is_verified=model.is_verified,
            quality_score=model.quality_score,
            is_high_quality=model.is_high_quality,
            moderation=Moderation(
                is_moderated=model.is_moderated,
                moderated_by=model.moderated_by,
                moderated_at=model.moderated_at,
                notes=model.moderation_notes,
                flags=[
                    ReviewFlag(
                        type=FlagType(flag["type"]),
                        reported_by=UUID(flag["reported_by"]),
                        reported_at=datetime.fromisoformat(flag["reported_at"]),
                        reason=flag.get("reason"),
                    )
                    for flag in model.flags or []
                ],
            ),
            artist_response=artist_response,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
