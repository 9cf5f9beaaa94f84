"""
Database models package.
"""

from .base import Base, BaseModel, UTCDateTime
from .job import JobModel
from .job_view import JobViewModel
from .notification import NotificationModel
from .proposal import ProposalModel
from .review import ReviewModel
from .user import UserModel

__all__ = [
    "Base",
    "BaseModel",
    "UTCDateTime",
    "JobModel",
    "JobViewModel",
    "NotificationModel",
    "ProposalModel",
    "ReviewModel",
    "UserModel",
]
