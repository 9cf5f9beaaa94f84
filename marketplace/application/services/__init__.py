"""
Application services package.
"""

from .notification_fanout import NotificationFanout
from .rating_aggregator import RatingAggregator, ReconciliationReport

__all__ = [
    "NotificationFanout",
    "RatingAggregator",
    "ReconciliationReport",
]
