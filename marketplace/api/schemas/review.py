"""
Review-related API schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from marketplace.domain.entities.review import Review
from marketplace.domain.value_objects.review_content import (
    DesignSatisfaction,
    RatingBreakdown,
    ReviewExperience,
    ReviewImage,
    ReviewRating,
)
from marketplace.domain.value_objects.review_status import (
    FlagType,
    ModerationAction,
    ReviewStatus,
    ReviewVisibility,
    VerificationMethod,
)


class RatingBreakdownSchema(BaseModel):
    quality: Optional[int] = None
    punctuality: Optional[int] = None
    professionalism: Optional[int] = None
    communication: Optional[int] = None
    value_for_money: Optional[int] = None
    creativity: Optional[int] = None


class RatingSchema(BaseModel):
    overall: int
    breakdown: RatingBreakdownSchema = RatingBreakdownSchema()

    def to_domain(self) -> ReviewRating:
        return ReviewRating(
            overall=self.overall,
            breakdown=RatingBreakdown(**self.breakdown.model_dump()),
        )


class ImageSchema(BaseModel):
    url: str
    description: Optional[str] = None


class ExperienceSchema(BaseModel):
    would_recommend: Optional[bool] = None
    would_hire_again: Optional[bool] = None
    design_satisfaction: Optional[DesignSatisfaction] = None
    service_highlights: List[str] = []
    areas_for_improvement: List[str] = []

    def to_domain(self) -> ReviewExperience:
        return ReviewExperience(
            would_recommend=self.would_recommend,
            would_hire_again=self.would_hire_again,
            design_satisfaction=self.design_satisfaction,
            service_highlights=tuple(self.service_highlights),
            areas_for_improvement=tuple(self.areas_for_improvement),
        )


class ReviewCreateRequest(BaseModel):
    """Review creation request schema."""

    job_id: UUID
    rating: RatingSchema
    comment: str
    title: Optional[str] = None
    images: List[ImageSchema] = []
    experience: ExperienceSchema = ExperienceSchema()
    visibility: ReviewVisibility = ReviewVisibility.PUBLIC

    def domain_images(self) -> List[ReviewImage]:
        return [ReviewImage(url=i.url, description=i.description) for i in self.images]


class ModerateReviewRequest(BaseModel):
    action: ModerationAction
    notes: Optional[str] = None


class FlagReviewRequest(BaseModel):
    type: FlagType
    reason: Optional[str] = None


class ReviewReplyRequest(BaseModel):
    message: str
    is_public: bool = True


class ArtistResponseSchema(BaseModel):
    message: str
    responded_at: datetime
    is_public: bool


class ReviewResponse(BaseModel):
    """Review response schema."""

    id: UUID
    reviewer_id: UUID
    reviewee_id: UUID
    job_id: UUID
    proposal_id: Optional[UUID] = None
    rating: RatingSchema
    title: Optional[str] = None
    comment: str
    images: List[ImageSchema]
    experience: ExperienceSchema
    status: ReviewStatus
    visibility: ReviewVisibility
    verification_method: Optional[VerificationMethod] = None
    is_verified: bool
    quality_score: int
    is_high_quality: bool
    flag_count: int
    artist_response: Optional[ArtistResponseSchema] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, review: Review) -> "ReviewResponse":
        experience = review.experience
        reply = review.artist_response
        return cls(
            id=review.id,
            reviewer_id=review.reviewer_id,
            reviewee_id=review.reviewee_id,
            job_id=review.job_id,
            proposal_id=review.proposal_id,
            rating=RatingSchema(
                overall=review.rating.overall,
                breakdown=RatingBreakdownSchema(**review.rating.breakdown.rated()),
            ),
            title=review.title,
            comment=review.comment,
            images=[
                ImageSchema(url=i.url, description=i.description)
                for i in review.images
            ],
            experience=ExperienceSchema(
                would_recommend=experience.would_recommend,
                would_hire_again=experience.would_hire_again,
                design_satisfaction=experience.design_satisfaction,
                service_highlights=list(experience.service_highlights),
                areas_for_improvement=list(experience.areas_for_improvement),
            ),
            status=review.status,
            visibility=review.visibility,
            verification_method=review.verification_method,
            is_verified=review.is_verified,
            quality_score=review.quality_score,
            is_high_quality=review.is_high_quality,
            flag_count=len(review.moderation.flags),
            artist_response=(
                ArtistResponseSchema(
                    message=reply.message,
                    responded_at=reply.responded_at,
                    is_public=reply.is_public,
                )
                if reply
                else None
            ),
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class ReviewStatsSchema(BaseModel):
    total_reviews: int
    average_rating: Decimal
    rating_distribution: Dict[int, int]
    recommendation_rate: Optional[Decimal] = None


class ArtistReviewsResponse(BaseModel):
    artist_id: UUID
    reviews: List[ReviewResponse]
    stats: ReviewStatsSchema
    page: int
    limit: int


class ArtistRatingResponse(BaseModel):
    artist_id: UUID
    average: Decimal
    count: int


class ReconciliationResponse(BaseModel):
    scanned: int
    corrected: int
    failed: int
    corrected_artist_ids: List[UUID]
