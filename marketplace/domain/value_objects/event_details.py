"""
Event details value object.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List

from marketplace.domain.exceptions.validation_error import FieldError

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class JobCategory(str, Enum):
    """Henna style category of a job."""

    BRIDAL = "bridal"
    PARTY = "party"
    FESTIVAL = "festival"
    CORPORATE = "corporate"
    TRADITIONAL = "traditional"
    MODERN = "modern"
    ARABIC = "arabic"
    INDIAN = "indian"
    OTHER = "other"


class EventType(str, Enum):
    """Kind of event a job is for."""

    WEDDING = "wedding"
    ENGAGEMENT = "engagement"
    BIRTHDAY = "birthday"
    FESTIVAL = "festival"
    CORPORATE = "corporate"
    BABY_SHOWER = "baby_shower"
    OTHER = "other"


@dataclass(frozen=True)
class EventDetails:
    """When and how big the event is."""

    event_type: EventType
    event_date: datetime
    event_time: str
    duration_hours: int
    guest_count: int

    def validate(self) -> List[FieldError]:
        """Return every structural field error (future date is checked at creation)."""
        errors = []
        if not self.event_time or not _TIME_PATTERN.match(self.event_time):
            errors.append(
                FieldError("event_details.event_time", "Event time must be in HH:MM format")
            )
        if not 1 <= self.duration_hours <= 12:
            errors.append(
                FieldError(
                    "event_details.duration_hours",
                    "Duration must be between 1 and 12 hours",
                )
            )
        if not 1 <= self.guest_count <= 50:
            errors.append(
                FieldError(
                    "event_details.guest_count",
                    "Guest count must be between 1 and 50",
                )
            )
        return errors
