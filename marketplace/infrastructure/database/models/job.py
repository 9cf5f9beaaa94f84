"""
Job SQLAlchemy model.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)

from marketplace.domain.value_objects.budget import Currency
from marketplace.domain.value_objects.job_status import JobPriority, JobStatus

from .base import BaseModel, UTCDateTime


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    client_id = Column(Uuid, nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(30), nullable=False, index=True)

    # Event details
    event_type = Column(String(30), nullable=False)
    event_date = Column(UTCDateTime(timezone=True), nullable=False, index=True)
    event_time = Column(String(5), nullable=False)
    duration_hours = Column(Integer, nullable=False)
    guest_count = Column(Integer, nullable=False)

    # Location
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(100))
    postal_code = Column(String(20), nullable=False)
    country = Column(String(100), default="UK", nullable=False)

    # Budget
    budget_min = Column(Numeric(precision=10, scale=2), nullable=False)
    budget_max = Column(Numeric(precision=10, scale=2), nullable=False)
    currency = Column(String(3), default=Currency.GBP.value, nullable=False)
    negotiable = Column(Boolean, default=True, nullable=False)

    status = Column(String(20), default=JobStatus.OPEN.value, nullable=False)
    priority = Column(String(10), default=JobPriority.MEDIUM.value, nullable=False)

    # Application policy
    accepting_applications = Column(Boolean, default=True, nullable=False)
    max_applications = Column(Integer, default=10, nullable=False)
    applications_received = Column(Integer, default=0, nullable=False)

    # Assignment
    assigned_artist_id = Column(Uuid, nullable=True, index=True)
    selected_proposal_id = Column(Uuid, nullable=True)

    application_deadline = Column(UTCDateTime(timezone=True), nullable=False)
    expires_at = Column(UTCDateTime(timezone=True), nullable=False)
    views = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        CheckConstraint("budget_max > budget_min", name="ck_jobs_budget_range"),
        CheckConstraint(
            "max_applications BETWEEN 1 AND 20", name="ck_jobs_max_applications"
        ),
        CheckConstraint(
            "applications_received <= max_applications",
            name="ck_jobs_applications_bound",
        ),
        CheckConstraint(
            "(assigned_artist_id IS NULL AND selected_proposal_id IS NULL)"
            " OR (assigned_artist_id IS NOT NULL AND selected_proposal_id IS NOT NULL)",
            name="ck_jobs_assignment_pair",
        ),
        Index("idx_jobs_status_event_date", "status", "event_date"),
        Index("idx_jobs_category_city", "category", "city"),
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, status={self.status})>"
