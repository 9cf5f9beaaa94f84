"""
Domain entities package.
"""

from .job import Job
from .notification import Notification, NotificationType
from .proposal import Proposal, ProposalBid
from .review import Review, compute_quality_score
from .user import User

__all__ = [
    "Job",
    "Notification",
    "NotificationType",
    "Proposal",
    "ProposalBid",
    "Review",
    "User",
    "compute_quality_score",
]
