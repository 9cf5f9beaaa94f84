"""
Job-related API schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from marketplace.domain.entities.job import Job
from marketplace.domain.value_objects.budget import Budget, Currency
from marketplace.domain.value_objects.event_details import (
    EventDetails,
    EventType,
    JobCategory,
)
from marketplace.domain.value_objects.job_status import JobPriority, JobStatus
from marketplace.domain.value_objects.location import Location

from .common import PaginatedResponse, TimestampMixin, as_utc


class EventDetailsSchema(BaseModel):
    """Event details schema."""

    event_type: EventType
    event_date: datetime
    event_time: str = Field(..., description="Start time, HH:MM")
    duration_hours: int
    guest_count: int

    @field_validator("event_date")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)

    def to_domain(self) -> EventDetails:
        return EventDetails(
            event_type=self.event_type,
            event_date=self.event_date,
            event_time=self.event_time,
            duration_hours=self.duration_hours,
            guest_count=self.guest_count,
        )

    @classmethod
    def from_domain(cls, details: EventDetails) -> "EventDetailsSchema":
        return cls(
            event_type=details.event_type,
            event_date=details.event_date,
            event_time=details.event_time,
            duration_hours=details.duration_hours,
            guest_count=details.guest_count,
        )


class LocationSchema(BaseModel):
    """Location schema."""

    address: str
    city: str
    postal_code: str
    state: Optional[str] = None
    country: str = "UK"

    def to_domain(self) -> Location:
        return Location(
            address=self.address,
            city=self.city,
            postal_code=self.postal_code,
            state=self.state,
            country=self.country,
        )

    @classmethod
    def from_domain(cls, location: Location) -> "LocationSchema":
        return cls(
            address=location.address,
            city=location.city,
            postal_code=location.postal_code,
            state=location.state,
            country=location.country,
        )


class BudgetSchema(BaseModel):
    """Budget schema."""

    min: Decimal
    max: Decimal
    currency: Currency = Currency.GBP
    negotiable: bool = True

    def to_domain(self) -> Budget:
        return Budget(
            min=self.min,
            max=self.max,
            currency=self.currency,
            negotiable=self.negotiable,
        )

    @classmethod
    def from_domain(cls, budget: Budget) -> "BudgetSchema":
        return cls(
            min=budget.min,
            max=budget.max,
            currency=budget.currency,
            negotiable=budget.negotiable,
        )


class JobCreateRequest(BaseModel):
    """Job creation request schema."""

    title: str
    description: str
    category: JobCategory
    event_details: EventDetailsSchema
    location: LocationSchema
    budget: BudgetSchema
    priority: JobPriority = JobPriority.MEDIUM
    accepting_applications: bool = True
    max_applications: int = Field(10, description="Between 1 and 20")


class JobUpdateRequest(BaseModel):
    """Partial job update; omitted fields keep their value."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[JobCategory] = None
    event_details: Optional[EventDetailsSchema] = None
    location: Optional[LocationSchema] = None
    budget: Optional[BudgetSchema] = None
    priority: Optional[JobPriority] = None
    accepting_applications: Optional[bool] = None
    max_applications: Optional[int] = None


class JobStatusUpdateRequest(BaseModel):
    """Owner-driven status change."""

    status: JobStatus


class JobResponse(TimestampMixin):
    """Job response schema."""

    id: UUID
    client_id: UUID
    title: str
    description: str
    category: JobCategory
    event_details: EventDetailsSchema
    location: LocationSchema
    budget: BudgetSchema
    status: JobStatus
    priority: JobPriority
    accepting_applications: bool
    max_applications: int
    applications_count: int
    assigned_artist_id: Optional[UUID] = None
    selected_proposal_id: Optional[UUID] = None
    application_deadline: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    views: int

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        return cls(
            id=job.id,
            client_id=job.client_id,
            title=job.title,
            description=job.description,
            category=job.category,
            event_details=EventDetailsSchema.from_domain(job.event_details),
            location=LocationSchema.from_domain(job.location),
            budget=BudgetSchema.from_domain(job.budget),
            status=job.status,
            priority=job.priority,
            accepting_applications=job.accepting_applications,
            max_applications=job.max_applications,
            applications_count=job.applications_count,
            assigned_artist_id=job.assigned_artist_id,
            selected_proposal_id=job.selected_proposal_id,
            application_deadline=job.application_deadline,
            expires_at=job.expires_at,
            views=job.views,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class JobCreatedResponse(JobResponse):
    """Job plus the number of artists notified."""

    notified_artists: int = 0


class EligibilityResponse(BaseModel):
    """Whether an artist may apply to a job."""

    job_id: UUID
    artist_id: UUID
    can_apply: bool
    reasons: List[str] = []


class JobListResponse(PaginatedResponse):
    items: List[JobResponse]
