"""
Application interfaces package.
"""

from .repositories import (
    JobRepositoryInterface,
    NotificationRepositoryInterface,
    ProposalRepositoryInterface,
    ReviewRepositoryInterface,
    UserRepositoryInterface,
)
from .services import NotificationFanoutInterface, RatingAggregatorInterface

__all__ = [
    "JobRepositoryInterface",
    "NotificationRepositoryInterface",
    "ProposalRepositoryInterface",
    "ReviewRepositoryInterface",
    "UserRepositoryInterface",
    "NotificationFanoutInterface",
    "RatingAggregatorInterface",
]
