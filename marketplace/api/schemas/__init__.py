"""
API schemas for the artist booking marketplace.
"""

from .common import BaseResponse, ErrorResponse, PaginatedResponse
from .job import (
    EligibilityResponse,
    JobCreatedResponse,
    JobCreateRequest,
    JobListResponse,
    JobResponse,
    JobStatusUpdateRequest,
    JobUpdateRequest,
)
from .notification import (
    NotificationBulkResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from .proposal import (
    AcceptProposalResponse,
    ProposalCreateRequest,
    ProposalListResponse,
    ProposalRejectRequest,
    ProposalResponse,
    ProposalStatsResponse,
    ProposalUpdateRequest,
)
from .review import (
    ArtistRatingResponse,
    ArtistReviewsResponse,
    FlagReviewRequest,
    ModerateReviewRequest,
    ReconciliationResponse,
    ReviewCreateRequest,
    ReviewReplyRequest,
    ReviewResponse,
)

__all__ = [
    "AcceptProposalResponse",
    "ArtistRatingResponse",
    "ArtistReviewsResponse",
    "BaseResponse",
    "EligibilityResponse",
    "ErrorResponse",
    "FlagReviewRequest",
    "JobCreateRequest",
    "JobCreatedResponse",
    "JobListResponse",
    "JobResponse",
    "JobStatusUpdateRequest",
    "JobUpdateRequest",
    "ModerateReviewRequest",
    "NotificationBulkResponse",
    "NotificationListResponse",
    "NotificationResponse",
    "PaginatedResponse",
    "ProposalCreateRequest",
    "ProposalListResponse",
    "ProposalRejectRequest",
    "ProposalResponse",
    "ProposalStatsResponse",
    "ProposalUpdateRequest",
    "ReconciliationResponse",
    "ReviewCreateRequest",
    "ReviewReplyRequest",
    "ReviewResponse",
    "UnreadCountResponse",
]
