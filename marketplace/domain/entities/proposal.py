"""Proposal domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from marketplace.domain.exceptions.access_error import ForbiddenError
from marketplace.domain.exceptions.lifecycle_error import InvalidStateError
from marketplace.domain.exceptions.validation_error import (
    ErrorCollector,
    FieldError,
)
from marketplace.domain.value_objects.pricing import (
    ClientResponse,
    EstimatedDuration,
    Pricing,
    ProposalTerms,
)
from marketplace.domain.value_objects.proposal_status import ProposalStatus

SIBLING_REJECTION_MESSAGE = "Another proposal was selected"


@dataclass(frozen=True)
class ProposalBid:
    """The artist-editable content of a proposal."""

    message: str
    pricing: Pricing
    estimated_duration: EstimatedDuration
    years_of_experience: Optional[int] = None
    relevant_experience: Optional[str] = None
    cover_letter: Optional[str] = None
    terms: ProposalTerms = field(default_factory=ProposalTerms)

    def validate(self) -> List[FieldError]:
        collector = ErrorCollector()
        message = (self.message or "").strip()
        collector.check(
            50 <= len(message) <= 1000,
            "message",
            "Proposal message must be between 50 and 1000 characters",
        )
        collector.extend(self.pricing.validate())
        collector.extend(self.estimated_duration.validate())
        if self.years_of_experience is not None:
            collector.check(
                self.years_of_experience >= 0,
                "years_of_experience",
                "Years of experience cannot be negative",
            )
        return collector.errors


@dataclass
class Proposal:
    """Proposal domain entity. Never physically deleted."""

    job_id: UUID
    artist_id: UUID
    bid: ProposalBid
    id: UUID = field(default_factory=uuid4)
    status: ProposalStatus = ProposalStatus.PENDING
    client_response: Optional[ClientResponse] = None
    submitted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize timestamps."""
        if not self.submitted_at:
            self.submitted_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = self.submitted_at

    @classmethod
    def submit(cls, job_id: UUID, artist_id: UUID, bid: ProposalBid) -> "Proposal":
        """Build a pending proposal after validating the bid."""
        collector = ErrorCollector()
        collector.extend(bid.validate())
        collector.raise_if_any()
        return cls(job_id=job_id, artist_id=artist_id, bid=bid)

    @property
    def is_pending(self) -> bool:
        return self.status == ProposalStatus.PENDING

    def ensure_artist(self, artist_id: UUID) -> None:
        if self.artist_id != artist_id:
            raise ForbiddenError("Only the proposing artist can perform this action")

    def _ensure_pending(self, action: str) -> None:
        if not self.is_pending:
            raise InvalidStateError(
                f"Cannot {action} a proposal that is {self.status.value}",
                current_status=self.status.value,
            )

    def revise(self, bid: ProposalBid) -> None:
        """Replace the bid while the proposal is still pending."""
        self._ensure_pending("update")
        collector = ErrorCollector()
        collector.extend(bid.validate())
        collector.raise_if_any()
        self.bid = bid
        self.updated_at = datetime.now(timezone.utc)

    def accept(self, client_id: UUID, now: Optional[datetime] = None) -> None:
        self._ensure_pending("accept")
        now = now or datetime.now(timezone.utc)
        self.status = ProposalStatus.ACCEPTED
        self.client_response = ClientResponse(responded_by=client_id, responded_at=now)
        self.updated_at = now

    def reject(
        self,
        client_id: UUID,
        message: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        self._ensure_pending("reject")
        now = now or datetime.now(timezone.utc)
        self.status = ProposalStatus.REJECTED
        self.client_response = ClientResponse(
            responded_by=client_id, responded_at=now, message=message or None
        )
        self.updated_at = now

    def withdraw(self) -> None:
        self._ensure_pending("withdraw")
        self.status = ProposalStatus.WITHDRAWN
        self.updated_at = datetime.now(timezone.utc)
