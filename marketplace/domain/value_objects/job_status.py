"""
Job status value object.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle status enumeration."""

    DRAFT = "draft"
    OPEN = "open"
    IN_REVIEW = "in_review"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    def is_biddable(self) -> bool:
        """Check if proposals may still be accepted against this status."""
        return self in (JobStatus.OPEN, JobStatus.IN_REVIEW)

    def is_editable(self) -> bool:
        """Check if the owner may still edit descriptive fields."""
        return self in (JobStatus.DRAFT, JobStatus.OPEN, JobStatus.IN_REVIEW)

    def is_final(self) -> bool:
        """Check if status is final (no more transitions)."""
        return self in (JobStatus.COMPLETED, JobStatus.CANCELLED, JobStatus.EXPIRED)

    def can_transition_to(self, target: "JobStatus") -> bool:
        """Check if an owner-driven transition to target is allowed."""
        return target in _OWNER_TRANSITIONS.get(self, ())


# Owner-driven transitions. Assignment and expiry have their own paths.
_OWNER_TRANSITIONS = {
    JobStatus.DRAFT: (JobStatus.OPEN, JobStatus.CANCELLED),
    JobStatus.OPEN: (JobStatus.CANCELLED,),
    JobStatus.IN_REVIEW: (JobStatus.CANCELLED,),
    JobStatus.ASSIGNED: (
        JobStatus.IN_PROGRESS,
        JobStatus.COMPLETED,
        JobStatus.CANCELLED,
    ),
    JobStatus.IN_PROGRESS: (JobStatus.COMPLETED,),
}


class JobPriority(str, Enum):
    """How urgently a client wants the job filled."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"
