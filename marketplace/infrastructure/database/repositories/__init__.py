"""
Database repositories package.
"""

from .job_repository import JobRepository
from .notification_repository import NotificationRepository
from .proposal_repository import ProposalRepository
from .review_repository import ReviewRepository
from .transaction_repository import TransactionService
from .user_repository import UserRepository

__all__ = [
    "JobRepository",
    "NotificationRepository",
    "ProposalRepository",
    "ReviewRepository",
    "TransactionService",
    "UserRepository",
]
