"""
Background tasks package.
"""

from .rating_reconciliation import (
    reconcile_artist_ratings_task,
    recompute_artist_rating_task,
)

__all__ = [
    "reconcile_artist_ratings_task",
    "recompute_artist_rating_task",
]
