"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from marketplace.domain.entities.job import Job
from marketplace.domain.entities.notification import Notification, NotificationType
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.entities.review import Review
from marketplace.domain.entities.user import User
from marketplace.domain.value_objects.artist_rating import ArtistRating
from marketplace.domain.value_objects.job_status import JobStatus
from marketplace.domain.value_objects.proposal_status import ProposalStatus


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID, reporting and persisting lazy expiry."""
        pass

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create a new job."""
        pass

    @abstractmethod
    async def update(
        self, job: Job, expected_status: Optional[JobStatus] = None
    ) -> Job:
        """Update an existing job.

        With expected_status the write only applies if the stored status still
        matches; otherwise InvalidStateError is raised.
        """
        pass

    @abstractmethod
    async def delete(self, job_id: UUID) -> bool:
        """Delete a job."""
        pass

    @abstractmethod
    async def record_view(self, job_id: UUID, artist_id: Optional[UUID] = None) -> bool:
        """Atomically count a view, remembering the artist once.

        Returns False when the job does not exist.
        """
        pass

    @abstractmethod
    async def claim_application_slot(self, job_id: UUID) -> bool:
        """Atomically reserve one application slot below the job's maximum."""
        pass

    @abstractmethod
    async def assign_if_biddable(
        self, job_id: UUID, artist_id: UUID, proposal_id: UUID
    ) -> bool:
        """Compare-and-swap the job from open/in_review to assigned.

        Returns True only for the single caller that wins the swap.
        """
        pass

    @abstractmethod
    async def list_by_client(
        self,
        client_id: UUID,
        status: Optional[JobStatus] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Job], int]:
        """List a client's jobs, newest first, with the total count.

        Stale open jobs of the client are expired before counting.
        """
        pass


class ProposalRepositoryInterface(ABC):
    """Proposal repository interface."""

    @abstractmethod
    async def get_by_id(self, proposal_id: UUID) -> Optional[Proposal]:
        """Get proposal by ID."""
        pass

    @abstractmethod
    async def find_by_job_and_artist(
        self, job_id: UUID, artist_id: UUID
    ) -> Optional[Proposal]:
        """Find the artist's proposal for a job, if any."""
        pass

    @abstractmethod
    async def create(self, proposal: Proposal) -> Proposal:
        """Create a new proposal. Raises ConflictError on a duplicate pair."""
        pass

    @abstractmethod
    async def update(
        self, proposal: Proposal, expected_status: Optional[ProposalStatus] = None
    ) -> Proposal:
        """Update an existing proposal, optionally conditional on its stored status."""
        pass

    @abstractmethod
    async def list_by_job(
        self,
        job_id: UUID,
        status: Optional[ProposalStatus] = None,
        limit: Optional[int] = None,
    ) -> List[Proposal]:
        """List a job's proposals, newest first."""
        pass

    @abstractmethod
    async def list_by_artist(
        self,
        artist_id: UUID,
        status: Optional[ProposalStatus] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Proposal], int]:
        """List an artist's proposals, newest first, with the total count."""
        pass

    @abstractmethod
    async def count_by_status(self, artist_id: UUID) -> Dict[str, int]:
        """Count an artist's proposals per status."""
        pass

    @abstractmethod
    async def accept_if_pending(
        self, proposal_id: UUID, client_id: UUID, responded_at: datetime
    ) -> bool:
        """Conditionally move a pending proposal to accepted."""
        pass

    @abstractmethod
    async def reject_pending_siblings(
        self,
        job_id: UUID,
        accepted_proposal_id: UUID,
        client_id: UUID,
        message: str,
        responded_at: datetime,
    ) -> List[UUID]:
        """Reject every other pending proposal of a job; return their IDs."""
        pass


class ReviewRepositoryInterface(ABC):
    """Review repository interface."""

    @abstractmethod
    async def get_by_id(self, review_id: UUID) -> Optional[Review]:
        """Get review by ID."""
        pass

    @abstractmethod
    async def exists_for_reviewer_and_job(self, reviewer_id: UUID, job_id: UUID) -> bool:
        """Check whether the reviewer already reviewed the job."""
        pass

    @abstractmethod
    async def create(self, review: Review) -> Review:
        """Create a new review. Raises ConflictError on a duplicate pair."""
        pass

    @abstractmethod
    async def update(self, review: Review) -> Review:
        """Update an existing review."""
        pass

    @abstractmethod
    async def delete(self, review_id: UUID) -> bool:
        """Physically remove a review."""
        pass

    @abstractmethod
    async def list_published_for_artist(
        self, artist_id: UUID, skip: int = 0, limit: int = 10
    ) -> List[Review]:
        """List an artist's published, non-private reviews, newest first."""
        pass

    @abstractmethod
    async def published_rating_totals(self, artist_id: UUID) -> Tuple[int, int]:
        """Sum and count of overall ratings over the artist's published reviews."""
        pass

    @abstractmethod
    async def artist_stats(self, artist_id: UUID) -> Dict:
        """Aggregate statistics over the artist's published reviews."""
        pass


class UserRepositoryInterface(ABC):
    """User repository interface."""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def find_new_job_subscribers(self) -> List[User]:
        """Active artists who opted into new-job notifications."""
        pass

    @abstractmethod
    async def list_artist_ids(self, skip: int = 0, limit: int = 100) -> List[UUID]:
        """Page through artist IDs in a stable order."""
        pass

    @abstractmethod
    async def save_rating(self, artist_id: UUID, rating: ArtistRating) -> bool:
        """Write the cached rating columns of an artist."""
        pass


class NotificationRepositoryInterface(ABC):
    """Notification repository interface."""

    @abstractmethod
    async def create_many(self, notifications: List[Notification]) -> List[Notification]:
        """Bulk insert notifications."""
        pass

    @abstractmethod
    async def list_for_recipient(
        self,
        recipient_id: UUID,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Notification], int]:
        """List a recipient's unexpired notifications, newest first, with the total."""
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: UUID) -> int:
        """Count a recipient's unexpired, unread notifications."""
        pass

    @abstractmethod
    async def mark_read(
        self, notification_id: UUID, recipient_id: UUID, read_at: datetime
    ) -> Optional[Notification]:
        """Mark one of the recipient's notifications read; None when not theirs."""
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: UUID, read_at: datetime) -> int:
        """Mark every unread notification of the recipient read; return the count."""
        pass

    @abstractmethod
    async def delete_for_recipient(self, notification_id: UUID, recipient_id: UUID) -> bool:
        """Delete one of the recipient's notifications."""
        pass

    @abstractmethod
    async def delete_read(self, recipient_id: UUID) -> int:
        """Delete the recipient's read notifications; return the count."""
        pass
