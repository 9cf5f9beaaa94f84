"""
Proposal pricing and terms value objects.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from marketplace.domain.exceptions.validation_error import FieldError
from marketplace.domain.value_objects.budget import Currency
from marketplace.domain.value_objects.proposal_status import DurationUnit

MIN_TOTAL_PRICE = Decimal("10")


@dataclass(frozen=True)
class Pricing:
    """Price an artist quotes for a job."""

    total_price: Decimal
    currency: Currency = Currency.GBP

    def validate(self) -> List[FieldError]:
        if self.total_price < MIN_TOTAL_PRICE:
            return [
                FieldError(
                    "pricing.total_price",
                    f"Total price must be at least {MIN_TOTAL_PRICE}",
                )
            ]
        return []


@dataclass(frozen=True)
class EstimatedDuration:
    """How long the artist expects the work to take."""

    value: int
    unit: DurationUnit = DurationUnit.HOURS

    def validate(self) -> List[FieldError]:
        if self.value < 1:
            return [
                FieldError("estimated_duration.value", "Duration must be at least 1")
            ]
        return []


@dataclass(frozen=True)
class ProposalTerms:
    """Free-text terms attached to a proposal."""

    payment_terms: Optional[str] = None
    cancellation_policy: Optional[str] = None
    additional_notes: Optional[str] = None


@dataclass(frozen=True)
class ClientResponse:
    """The client's recorded decision on a proposal."""

    responded_by: UUID
    responded_at: datetime
    message: Optional[str] = None
