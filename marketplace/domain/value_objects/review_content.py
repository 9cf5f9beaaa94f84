"""
Review content value objects.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple
from uuid import UUID

from marketplace.domain.exceptions.validation_error import FieldError
from marketplace.domain.value_objects.review_status import FlagType


class DesignSatisfaction(str, Enum):
    VERY_UNSATISFIED = "very_unsatisfied"
    UNSATISFIED = "unsatisfied"
    NEUTRAL = "neutral"
    SATISFIED = "satisfied"
    VERY_SATISFIED = "very_satisfied"


def _check_star(value: Optional[int], name: str) -> List[FieldError]:
    if value is not None and not 1 <= value <= 5:
        return [FieldError(name, "Rating must be between 1 and 5")]
    return []


@dataclass(frozen=True)
class RatingBreakdown:
    """Optional per-category star ratings."""

    quality: Optional[int] = None
    punctuality: Optional[int] = None
    professionalism: Optional[int] = None
    communication: Optional[int] = None
    value_for_money: Optional[int] = None
    creativity: Optional[int] = None

    def rated(self) -> dict:
        """Categories that carry a rating."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def count(self) -> int:
        return len(self.rated())

    def validate(self) -> List[FieldError]:
        errors = []
        for name, value in self.rated().items():
            errors.extend(_check_star(value, f"rating.breakdown.{name}"))
        return errors


@dataclass(frozen=True)
class ReviewRating:
    """Overall star rating plus optional breakdown."""

    overall: int
    breakdown: RatingBreakdown = field(default_factory=RatingBreakdown)

    def validate(self) -> List[FieldError]:
        errors = []
        if self.overall is None:
            errors.append(FieldError("rating.overall", "Overall rating is required"))
        else:
            errors.extend(_check_star(self.overall, "rating.overall"))
        errors.extend(self.breakdown.validate())
        return errors


@dataclass(frozen=True)
class ReviewImage:
    """Opaque image URL supplied by the file storage collaborator."""

    url: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ReviewExperience:
    """Client's experience flags."""

    would_recommend: Optional[bool] = None
    would_hire_again: Optional[bool] = None
    design_satisfaction: Optional[DesignSatisfaction] = None
    service_highlights: Tuple[str, ...] = ()
    areas_for_improvement: Tuple[str, ...] = ()

    @property
    def flags_complete(self) -> bool:
        return self.would_recommend is not None and self.would_hire_again is not None


@dataclass(frozen=True)
class ReviewFlag:
    """A report raised against a review."""

    type: FlagType
    reported_by: UUID
    reported_at: datetime
    reason: Optional[str] = None


@dataclass
class Moderation:
    """Moderation record of a review."""

    is_moderated: bool = False
    moderated_by: Optional[UUID] = None
    moderated_at: Optional[datetime] = None
    notes: Optional[str] = None
    flags: List[ReviewFlag] = field(default_factory=list)


@dataclass(frozen=True)
class ArtistResponse:
    """The reviewed artist's public reply."""

    message: str
    responded_at: datetime
    is_public: bool = True
