"""
Proposal SQLAlchemy model.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    text,
)

from marketplace.domain.value_objects.budget import Currency
from marketplace.domain.value_objects.proposal_status import (
    DurationUnit,
    ProposalStatus,
)

from .base import BaseModel, UTCDateTime, utc_now


class ProposalModel(BaseModel):
    """Proposal database model."""

    __tablename__ = "proposals"

    job_id = Column(Uuid, ForeignKey("jobs.id"), nullable=False)
    artist_id = Column(Uuid, nullable=False, index=True)
    message = Column(Text, nullable=False)

    # Pricing and timeline
    total_price = Column(Numeric(precision=10, scale=2), nullable=False)
    currency = Column(String(3), default=Currency.GBP.value, nullable=False)
    duration_value = Column(Integer, nullable=False)
    duration_unit = Column(String(10), default=DurationUnit.HOURS.value, nullable=False)

    # Experience
    years_of_experience = Column(Integer)
    relevant_experience = Column(Text)
    cover_letter = Column(Text)

    # Terms
    payment_terms = Column(Text)
    cancellation_policy = Column(Text)
    additional_notes = Column(Text)

    status = Column(String(20), default=ProposalStatus.PENDING.value, nullable=False)

    # Client response
    response_message = Column(Text)
    responded_by = Column(Uuid)
    responded_at = Column(UTCDateTime(timezone=True))

    submitted_at = Column(UTCDateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        # One proposal per artist per job
        Index("uq_proposals_job_artist", "job_id", "artist_id", unique=True),
        # At most one accepted proposal per job
        Index(
            "uq_proposals_one_accepted_per_job",
            "job_id",
            unique=True,
            postgresql_where=text("status = 'accepted'"),
            sqlite_where=text("status = 'accepted'"),
        ),
        Index("idx_proposals_job_status", "job_id", "status"),
        Index("idx_proposals_artist_submitted", "artist_id", "submitted_at"),
    )

    def __repr__(self) -> str:
        return f"<Proposal(id={self.id}, job_id={self.job_id}, status={self.status})>"
