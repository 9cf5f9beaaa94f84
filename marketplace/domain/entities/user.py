"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from marketplace.domain.value_objects.artist_rating import ArtistRating
from marketplace.domain.value_objects.principal import UserType


@dataclass
class User:
    """Marketplace user as seen by the booking core.

    Accounts are owned by the auth collaborator; the core only reads them,
    except for the artist rating columns which the rating aggregator writes.
    """

    user_type: UserType
    id: UUID = field(default_factory=uuid4)
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool = True
    notify_new_jobs: bool = True
    email_new_jobs: bool = False
    rating: ArtistRating = field(default_factory=ArtistRating)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize timestamps."""
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = self.created_at

    @property
    def is_artist(self) -> bool:
        return self.user_type == UserType.ARTIST

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    def wants_new_job_alerts(self) -> bool:
        return self.is_artist and self.is_active and self.notify_new_jobs
