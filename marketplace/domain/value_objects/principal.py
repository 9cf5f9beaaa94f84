"""
Authenticated principal value object.
"""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class UserType(str, Enum):
    """Kind of marketplace user."""

    CLIENT = "client"
    ARTIST = "artist"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """Caller identity as supplied by the auth collaborator. Trusted as-is."""

    id: UUID
    user_type: UserType

    @property
    def is_client(self) -> bool:
        return self.user_type == UserType.CLIENT

    @property
    def is_artist(self) -> bool:
        return self.user_type == UserType.ARTIST

    @property
    def is_admin(self) -> bool:
        return self.user_type == UserType.ADMIN
