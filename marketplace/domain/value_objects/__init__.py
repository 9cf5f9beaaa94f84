"""
Domain value objects package.
"""

from .artist_rating import ArtistRating
from .budget import Budget, Currency
from .event_details import EventDetails, EventType, JobCategory
from .job_status import JobPriority, JobStatus
from .location import Location
from .pricing import ClientResponse, EstimatedDuration, Pricing, ProposalTerms
from .principal import Principal, UserType
from .proposal_status import DurationUnit, ProposalStatus
from .review_content import (
    ArtistResponse,
    DesignSatisfaction,
    Moderation,
    RatingBreakdown,
    ReviewExperience,
    ReviewFlag,
    ReviewImage,
    ReviewRating,
)
from .review_status import (
    FlagType,
    ModerationAction,
    ReviewStatus,
    ReviewVisibility,
    VerificationMethod,
)

__all__ = [
    "ArtistRating",
    "ArtistResponse",
    "DesignSatisfaction",
    "Moderation",
    "RatingBreakdown",
    "ReviewExperience",
    "ReviewFlag",
    "ReviewImage",
    "ReviewRating",
    "Budget",
    "ClientResponse",
    "Currency",
    "DurationUnit",
    "EventDetails",
    "EstimatedDuration",
    "EventType",
    "FlagType",
    "JobCategory",
    "JobPriority",
    "JobStatus",
    "Location",
    "ModerationAction",
    "Pricing",
    "Principal",
    "ProposalTerms",
    "ProposalStatus",
    "ReviewStatus",
    "ReviewVisibility",
    "UserType",
    "VerificationMethod",
]
