"""
Review SQLAlchemy model.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)

from marketplace.domain.value_objects.review_status import (
    ReviewStatus,
    ReviewVisibility,
)

from .base import BaseModel, UTCDateTime


class ReviewModel(BaseModel):
    """Review database model."""

    __tablename__ = "reviews"

    reviewer_id = Column(Uuid, nullable=False)
    reviewee_id = Column(Uuid, nullable=False)
    job_id = Column(Uuid, ForeignKey("jobs.id"), nullable=False, index=True)
    proposal_id = Column(Uuid)

    # Rating and written review
    rating_overall = Column(Integer, nullable=False)
    rating_breakdown = Column(JSON, default=dict, nullable=False)
    title = Column(String(100))
    comment = Column(Text, nullable=False)
    images = Column(JSON, default=list, nullable=False)

    # Experience
    would_recommend = Column(Boolean)
    would_hire_again = Column(Boolean)
    design_satisfaction = Column(String(30))
    service_highlights = Column(JSON, default=list, nullable=False)
    areas_for_improvement = Column(JSON, default=list, nullable=False)

    status = Column(String(20), default=ReviewStatus.SUBMITTED.value, nullable=False)
    visibility = Column(
        String(20), default=ReviewVisibility.PUBLIC.value, nullable=False
    )
    verification_method = Column(String(30))
    is_verified = Column(Boolean, default=False, nullable=False)
    quality_score = Column(Integer, default=0, nullable=False)
    is_high_quality = Column(Boolean, default=False, nullable=False)

    # Moderation
    is_moderated = Column(Boolean, default=False, nullable=False)
    moderated_by = Column(Uuid)
    moderated_at = Column(UTCDateTime(timezone=True))
    moderation_notes = Column(Text)
    flags = Column(JSON, default=list, nullable=False)

    # Artist response
    response_message = Column(String(500))
    response_at = Column(UTCDateTime(timezone=True))
    response_is_public = Column(Boolean)

    __table_args__ = (
        CheckConstraint(
            "rating_overall BETWEEN 1 AND 5", name="ck_reviews_rating_overall"
        ),
        CheckConstraint(
            "quality_score BETWEEN 0 AND 100", name="ck_reviews_quality_score"
        ),
        # One review per reviewer per job
        Index("uq_reviews_reviewer_job", "reviewer_id", "job_id", unique=True),
        Index("idx_reviews_reviewee_status", "reviewee_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, reviewee_id={self.reviewee_id}, status={self.status})>"
