"""
Proposal-related API schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from marketplace.domain.entities.proposal import Proposal, ProposalBid
from marketplace.domain.value_objects.budget import Currency
from marketplace.domain.value_objects.pricing import (
    EstimatedDuration,
    Pricing,
    ProposalTerms,
)
from marketplace.domain.value_objects.proposal_status import (
    DurationUnit,
    ProposalStatus,
)

from .common import PaginatedResponse
from .job import JobResponse


class PricingSchema(BaseModel):
    total_price: Decimal
    currency: Currency = Currency.GBP


class DurationSchema(BaseModel):
    value: int
    unit: DurationUnit = DurationUnit.HOURS


class TermsSchema(BaseModel):
    payment_terms: Optional[str] = None
    cancellation_policy: Optional[str] = None
    additional_notes: Optional[str] = None


class ProposalBidSchema(BaseModel):
    """Artist-editable proposal content."""

    message: str
    pricing: PricingSchema
    estimated_duration: DurationSchema
    years_of_experience: Optional[int] = None
    relevant_experience: Optional[str] = None
    cover_letter: Optional[str] = None
    terms: TermsSchema = TermsSchema()

    def to_domain(self) -> ProposalBid:
        return ProposalBid(
            message=self.message,
            pricing=Pricing(
                total_price=self.pricing.total_price, currency=self.pricing.currency
            ),
            estimated_duration=EstimatedDuration(
                value=self.estimated_duration.value,
                unit=self.estimated_duration.unit,
            ),
            years_of_experience=self.years_of_experience,
            relevant_experience=self.relevant_experience,
            cover_letter=self.cover_letter,
            terms=ProposalTerms(
                payment_terms=self.terms.payment_terms,
                cancellation_policy=self.terms.cancellation_policy,
                additional_notes=self.terms.additional_notes,
            ),
        )


class ProposalCreateRequest(ProposalBidSchema):
    """Proposal submission request."""

    job_id: UUID


class ProposalUpdateRequest(ProposalBidSchema):
    """Replacement bid for a pending proposal."""


class ProposalRejectRequest(BaseModel):
    message: Optional[str] = None


class ClientResponseSchema(BaseModel):
    responded_by: UUID
    responded_at: datetime
    message: Optional[str] = None


class ProposalResponse(BaseModel):
    """Proposal response schema."""

    id: UUID
    job_id: UUID
    artist_id: UUID
    status: ProposalStatus
    message: str
    pricing: PricingSchema
    estimated_duration: DurationSchema
    years_of_experience: Optional[int] = None
    relevant_experience: Optional[str] = None
    cover_letter: Optional[str] = None
    terms: TermsSchema
    client_response: Optional[ClientResponseSchema] = None
    submitted_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, proposal: Proposal) -> "ProposalResponse":
        bid = proposal.bid
        response = proposal.client_response
        return cls(
            id=proposal.id,
            job_id=proposal.job_id,
            artist_id=proposal.artist_id,
            status=proposal.status,
            message=bid.message,
            pricing=PricingSchema(
                total_price=bid.pricing.total_price, currency=bid.pricing.currency
            ),
            estimated_duration=DurationSchema(
                value=bid.estimated_duration.value, unit=bid.estimated_duration.unit
            ),
            years_of_experience=bid.years_of_experience,
            relevant_experience=bid.relevant_experience,
            cover_letter=bid.cover_letter,
            terms=TermsSchema(
                payment_terms=bid.terms.payment_terms,
                cancellation_policy=bid.terms.cancellation_policy,
                additional_notes=bid.terms.additional_notes,
            ),
            client_response=(
                ClientResponseSchema(
                    responded_by=response.responded_by,
                    responded_at=response.responded_at,
                    message=response.message,
                )
                if response
                else None
            ),
            submitted_at=proposal.submitted_at,
            updated_at=proposal.updated_at,
        )


class ProposalListResponse(PaginatedResponse):
    items: List[ProposalResponse]


class AcceptProposalResponse(BaseModel):
    """Accepted proposal with the now-assigned job."""

    proposal: ProposalResponse
    job: JobResponse
    rejected_proposal_ids: List[UUID]


class ProposalStatsResponse(BaseModel):
    artist_id: UUID
    counts: Dict[str, int]
