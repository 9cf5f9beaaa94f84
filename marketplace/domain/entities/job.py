"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from marketplace.domain.exceptions.access_error import ForbiddenError
from marketplace.domain.exceptions.lifecycle_error import InvalidStateError
from marketplace.domain.exceptions.validation_error import (
    ErrorCollector,
    ValidationError,
)
from marketplace.domain.value_objects.budget import Budget
from marketplace.domain.value_objects.event_details import EventDetails, JobCategory
from marketplace.domain.value_objects.job_status import JobPriority, JobStatus
from marketplace.domain.value_objects.location import Location

APPLICATION_DEADLINE_LEAD = timedelta(days=7)
EXPIRY_GRACE = timedelta(days=1)
MAX_APPLICATIONS_LIMIT = 20

# Fields the owner may change through update_details
EDITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "category",
        "event_details",
        "location",
        "budget",
        "priority",
        "accepting_applications",
        "max_applications",
    }
)


@dataclass
class Job:
    """Job domain entity."""

    client_id: UUID
    title: str
    description: str
    category: JobCategory
    event_details: EventDetails
    location: Location
    budget: Budget
    id: UUID = field(default_factory=uuid4)
    status: JobStatus = JobStatus.OPEN
    priority: JobPriority = JobPriority.MEDIUM

    # Application policy
    accepting_applications: bool = True
    max_applications: int = 10
    received_proposal_ids: List[UUID] = field(default_factory=list)

    # Assignment, set together or not at all
    assigned_artist_id: Optional[UUID] = None
    selected_proposal_id: Optional[UUID] = None

    application_deadline: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate structural invariants and fill derived defaults."""
        if self.budget.max <= self.budget.min:
            raise ValidationError.single(
                "budget.max", "Maximum budget must be greater than minimum"
            )
        if not 1 <= self.max_applications <= MAX_APPLICATIONS_LIMIT:
            raise ValidationError.single(
                "max_applications",
                f"Max applications must be between 1 and {MAX_APPLICATIONS_LIMIT}",
            )
        if (self.assigned_artist_id is None) != (self.selected_proposal_id is None):
            raise ValueError(
                "assigned_artist_id and selected_proposal_id must be set together"
            )

        if not self.application_deadline:
            self.application_deadline = (
                self.event_details.event_date - APPLICATION_DEADLINE_LEAD
            )
        if not self.expires_at:
            self.expires_at = self.event_details.event_date + EXPIRY_GRACE

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create(
        cls,
        client_id: UUID,
        title: str,
        description: str,
        category: JobCategory,
        event_details: EventDetails,
        location: Location,
        budget: Budget,
        priority: JobPriority = JobPriority.MEDIUM,
        accepting_applications: bool = True,
        max_applications: int = 10,
        now: Optional[datetime] = None,
    ) -> "Job":
        """Build a new open job, reporting every invalid field at once."""
        now = now or datetime.now(timezone.utc)

        collector = ErrorCollector()
        collector.extend(validate_descriptive_fields(title, description))
        collector.extend(event_details.validate())
        collector.extend(location.validate())
        collector.extend(budget.validate())
        collector.check(
            1 <= max_applications <= MAX_APPLICATIONS_LIMIT,
            "max_applications",
            f"Max applications must be between 1 and {MAX_APPLICATIONS_LIMIT}",
        )
        collector.check(
            event_details.event_date > now,
            "event_details.event_date",
            "Event date must be in the future",
        )
        collector.raise_if_any()

        return cls(
            client_id=client_id,
            title=title.strip(),
            description=description.strip(),
            category=category,
            event_details=event_details,
            location=location,
            budget=budget,
            priority=priority,
            status=JobStatus.OPEN,
            accepting_applications=accepting_applications,
            max_applications=max_applications,
            created_at=now,
            updated_at=now,
        )

    @property
    def applications_count(self) -> int:
        return len(self.received_proposal_ids)

    @property
    def is_assigned(self) -> bool:
        return self.selected_proposal_id is not None

    def is_past_event(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.event_details.event_date < now

    def refresh_expiry(self, now: Optional[datetime] = None) -> bool:
        """Report an open job whose event has passed as expired.

        Returns True when the status changed, so the caller can persist it.
        """
        if self.status == JobStatus.OPEN and self.is_past_event(now):
            self.status = JobStatus.EXPIRED
            self.accepting_applications = False
            self.updated_at = now or datetime.now(timezone.utc)
            return True
        return False

    def is_owned_by(self, client_id: UUID) -> bool:
        return self.client_id == client_id

    def ensure_owner(self, client_id: UUID) -> None:
        if not self.is_owned_by(client_id):
            raise ForbiddenError("Only the job owner can perform this action")

    def application_blockers(self, now: Optional[datetime] = None) -> List[str]:
        """Reasons the job-side policy refuses new applications."""
        now = now or datetime.now(timezone.utc)
        reasons = []
        if self.status != JobStatus.OPEN:
            reasons.append(f"Job is {self.status.value}")
        if not self.accepting_applications:
            reasons.append("Job is not accepting applications")
        if self.application_deadline <= now:
            reasons.append("Application deadline has passed")
        if self.applications_count >= self.max_applications:
            reasons.append("Job has reached its maximum number of applications")
        return reasons

    def accepts_applications(self, now: Optional[datetime] = None) -> bool:
        """Check the job-side application policy."""
        return not self.application_blockers(now)

    def can_artist_apply(
        self, already_applied: bool, now: Optional[datetime] = None
    ) -> bool:
        """Check if an artist may submit a proposal to this job."""
        return self.accepts_applications(now) and not already_applied

    def register_proposal(self, proposal_id: UUID) -> None:
        """Append a received proposal within the application limit."""
        if self.applications_count >= self.max_applications:
            raise InvalidStateError(
                "Job has reached its maximum number of applications",
                current_status=self.status.value,
            )
        self.received_proposal_ids.append(proposal_id)
        self.updated_at = datetime.now(timezone.utc)

    def assign_artist(self, artist_id: UUID, proposal_id: UUID) -> None:
        """Close the job to bidding and assign it to the winning proposal."""
        if not self.status.is_biddable() or self.is_assigned:
            raise InvalidStateError(
                f"Job cannot be assigned while {self.status.value}",
                current_status=self.status.value,
            )

        self.status = JobStatus.ASSIGNED
        self.assigned_artist_id = artist_id
        self.selected_proposal_id = proposal_id
        self.accepting_applications = False
        self.updated_at = datetime.now(timezone.utc)

    def transition_to(self, target: JobStatus) -> None:
        """Apply an owner-driven status change."""
        if not self.status.can_transition_to(target):
            raise InvalidStateError(
                f"Cannot change job status from {self.status.value} to {target.value}",
                current_status=self.status.value,
            )
        if target == JobStatus.OPEN and self.is_past_event():
            raise InvalidStateError(
                "Cannot open a job whose event date has passed",
                current_status=self.status.value,
            )

        self.status = target
        if target in (JobStatus.CANCELLED, JobStatus.COMPLETED):
            self.accepting_applications = False
        self.updated_at = datetime.now(timezone.utc)

    def update_details(self, **changes) -> None:
        """Apply owner edits while the job is still open for bidding."""
        if not self.status.is_editable():
            raise InvalidStateError(
                f"Job cannot be edited while {self.status.value}",
                current_status=self.status.value,
            )
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {sorted(unknown)}")

        merged = {name: getattr(self, name) for name in EDITABLE_FIELDS}
        merged.update({k: v for k, v in changes.items() if v is not None})

        collector = ErrorCollector()
        collector.extend(
            validate_descriptive_fields(merged["title"], merged["description"])
        )
        collector.extend(merged["event_details"].validate())
        collector.extend(merged["location"].validate())
        collector.extend(merged["budget"].validate())
        collector.check(
            1 <= merged["max_applications"] <= MAX_APPLICATIONS_LIMIT,
            "max_applications",
            f"Max applications must be between 1 and {MAX_APPLICATIONS_LIMIT}",
        )
        collector.check(
            merged["max_applications"] >= self.applications_count,
            "max_applications",
            "Max applications cannot be below the number already received",
        )
        if "event_details" in changes and changes["event_details"] is not None:
            collector.check(
                not merged["event_details"].event_date < datetime.now(timezone.utc),
                "event_details.event_date",
                "Event date must be in the future",
            )
        collector.raise_if_any()

        if (
            changes.get("event_details") is not None
            and changes["event_details"].event_date != self.event_details.event_date
        ):
            self.application_deadline = (
                merged["event_details"].event_date - APPLICATION_DEADLINE_LEAD
            )
            self.expires_at = merged["event_details"].event_date + EXPIRY_GRACE

        for name, value in merged.items():
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)

    def can_be_deleted(self) -> bool:
        """Jobs with proposals or an assignment keep their history; cancel instead."""
        if self.received_proposal_ids:
            return False
        return not self.is_assigned and self.status not in (
            JobStatus.ASSIGNED,
            JobStatus.IN_PROGRESS,
            JobStatus.COMPLETED,
        )


def validate_descriptive_fields(title: str, description: str):
    """Length checks shared by creation and owner edits."""
    collector = ErrorCollector()
    title = (title or "").strip()
    description = (description or "").strip()
    collector.check(
        5 <= len(title) <= 100, "title", "Title must be between 5 and 100 characters"
    )
    collector.check(
        50 <= len(description) <= 1000,
        "description",
        "Description must be between 50 and 1000 characters",
    )
    return collector.errors
