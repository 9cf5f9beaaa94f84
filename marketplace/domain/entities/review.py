"""Review domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from marketplace.domain.exceptions.access_error import ForbiddenError
from marketplace.domain.exceptions.validation_error import ErrorCollector
from marketplace.domain.value_objects.review_content import (
    ArtistResponse,
    Moderation,
    ReviewExperience,
    ReviewFlag,
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

HIGH_QUALITY_THRESHOLD = 80
MAX_RESPONSE_LENGTH = 500


def compute_quality_score(
    rating: ReviewRating,
    comment: Optional[str],
    images: List[ReviewImage],
    experience: ReviewExperience,
) -> int:
    """Deterministic completeness heuristic in the range 0-100.

    30 for an overall rating, up to 25 for comment length, 3 per rated
    breakdown category (max 20), up to 15 for images and 10 when both
    experience flags are answered.
    """
    score = 0

    if rating.overall:
        score += 30

    comment_length = len(comment or "")
    if comment_length >= 50:
        score += 25
    elif comment_length >= 20:
        score += 15
    elif comment_length > 0:
        score += 10

    score += min(20, rating.breakdown.count * 3)

    if len(images) >= 3:
        score += 15
    elif len(images) >= 1:
        score += 10

    if experience.flags_complete:
        score += 10

    return min(100, score)


@dataclass
class Review:
    """Review domain entity."""

    reviewer_id: UUID
    reviewee_id: UUID
    job_id: UUID
    rating: ReviewRating
    comment: str
    proposal_id: Optional[UUID] = None
    title: Optional[str] = None
    images: List[ReviewImage] = field(default_factory=list)
    experience: ReviewExperience = field(default_factory=ReviewExperience)
    id: UUID = field(default_factory=uuid4)
    status: ReviewStatus = ReviewStatus.SUBMITTED
    moderation: Moderation = field(default_factory=Moderation)
    visibility: ReviewVisibility = ReviewVisibility.PUBLIC
    verification_method: Optional[VerificationMethod] = None
    is_verified: bool = False
    quality_score: int = 0
    is_high_quality: bool = False
    artist_response: Optional[ArtistResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize timestamps."""
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = self.created_at

    @classmethod
    def create(
        cls,
        reviewer_id: UUID,
        reviewee_id: UUID,
        job_id: UUID,
        rating: ReviewRating,
        comment: str,
        proposal_id: Optional[UUID] = None,
        title: Optional[str] = None,
        images: Optional[List[ReviewImage]] = None,
        experience: Optional[ReviewExperience] = None,
        visibility: ReviewVisibility = ReviewVisibility.PUBLIC,
        verification_method: Optional[VerificationMethod] = None,
    ) -> "Review":
        """Validate the payload and build a review with derived quality fields."""
        collector = ErrorCollector()
        collector.extend(rating.validate())
        comment = (comment or "").strip()
        collector.check(
            10 <= len(comment) <= 1000,
            "comment",
            "Comment must be between 10 and 1000 characters",
        )
        if title is not None:
            collector.check(
                len(title.strip()) <= 100,
                "title",
                "Title cannot exceed 100 characters",
            )
        for index, image in enumerate(images or []):
            collector.check(
                bool(image.url and image.url.strip()),
                f"images.{index}.url",
                "Image URL is required",
            )
        collector.raise_if_any()

        review = cls(
            reviewer_id=reviewer_id,
            reviewee_id=reviewee_id,
            job_id=job_id,
            rating=rating,
            comment=comment,
            proposal_id=proposal_id,
            title=title.strip() if title else None,
            images=list(images or []),
            experience=experience or ReviewExperience(),
            visibility=visibility,
            verification_method=verification_method,
        )
        review.recompute_on_save()
        return review

    @property
    def is_published(self) -> bool:
        return self.status == ReviewStatus.PUBLISHED

    def recompute_on_save(self) -> None:
        """Derive quality, verification and auto-publish. Idempotent."""
        self.quality_score = compute_quality_score(
            self.rating, self.comment, self.images, self.experience
        )
        self.is_high_quality = self.quality_score >= HIGH_QUALITY_THRESHOLD

        if self.verification_method == VerificationMethod.BOOKING_CONFIRMED:
            self.is_verified = True

        if (
            self.is_high_quality
            and self.is_verified
            and self.status == ReviewStatus.SUBMITTED
        ):
            self.status = ReviewStatus.PUBLISHED

        self.updated_at = datetime.now(timezone.utc)

    def moderate(
        self,
        moderator_id: UUID,
        action: ModerationAction,
        notes: Optional[str] = None,
    ) -> None:
        now = datetime.now(timezone.utc)
        self.moderation.is_moderated = True
        self.moderation.moderated_by = moderator_id
        self.moderation.moderated_at = now
        self.moderation.notes = notes
        self.status = action.resulting_status()
        self.recompute_on_save()

    def flag(
        self, reporter_id: UUID, flag_type: FlagType, reason: Optional[str] = None
    ) -> None:
        """Report the review; a published review leaves the public rating."""
        # Otherwise an artist could drop any review from their own rating
        if reporter_id == self.reviewee_id:
            raise ForbiddenError("The reviewed artist cannot flag this review")

        self.moderation.flags.append(
            ReviewFlag(
                type=flag_type,
                reported_by=reporter_id,
                reported_at=datetime.now(timezone.utc),
                reason=reason,
            )
        )
        if self.status == ReviewStatus.PUBLISHED:
            self.status = ReviewStatus.FLAGGED
        self.recompute_on_save()

    def respond(self, artist_id: UUID, message: str, is_public: bool = True) -> None:
        """Record the reviewed artist's reply, replacing any earlier one."""
        if artist_id != self.reviewee_id:
            raise ForbiddenError("Only the reviewed artist can respond to this review")

        collector = ErrorCollector()
        message = (message or "").strip()
        collector.check(bool(message), "message", "Response message is required")
        collector.check(
            len(message) <= MAX_RESPONSE_LENGTH,
            "message",
            f"Response cannot exceed {MAX_RESPONSE_LENGTH} characters",
        )
        collector.raise_if_any()

        self.artist_response = ArtistResponse(
            message=message,
            responded_at=datetime.now(timezone.utc),
            is_public=is_public,
        )
        self.recompute_on_save()
