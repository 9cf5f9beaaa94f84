"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from marketplace.domain.entities.job import Job
from marketplace.domain.entities.notification import Notification
from marketplace.domain.value_objects.artist_rating import ArtistRating


class NotificationFanoutInterface(ABC):
    """Interface for the notification fan-out collaborator."""

    @abstractmethod
    async def notify_artists_of_new_job(self, job: Job) -> List[Notification]:
        """Create one notification per subscribed artist for a new job."""
        pass


class RatingAggregatorInterface(ABC):
    """Interface for the artist rating aggregator."""

    @abstractmethod
    async def recompute(self, artist_id: UUID) -> ArtistRating:
        """Recompute and persist an artist's rating from published reviews."""
        pass

    @abstractmethod
    async def recompute_quietly(self, artist_id: UUID) -> None:
        """Recompute, logging and swallowing any failure."""
        pass
