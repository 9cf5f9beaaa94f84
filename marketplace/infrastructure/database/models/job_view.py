"""
Job view SQLAlchemy model.
"""

from sqlalchemy import Column, ForeignKey, Uuid

from .base import Base, UTCDateTime, utc_now


class JobViewModel(Base):
    """Deduplicated record of an artist having viewed a job."""

    __tablename__ = "job_views"

    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)
    artist_id = Column(Uuid, primary_key=True)
    viewed_at = Column(UTCDateTime(timezone=True), default=utc_now, nullable=False)

    def __repr__(self) -> str:
        return f"<JobView(job_id={self.job_id}, artist_id={self.artist_id})>"
