"""
Location value object.
"""

from dataclasses import dataclass
from typing import List, Optional

from marketplace.domain.exceptions.validation_error import FieldError


@dataclass(frozen=True)
class Location:
    """Where a job takes place."""

    address: str
    city: str
    postal_code: str
    state: Optional[str] = None
    country: str = "UK"

    def validate(self) -> List[FieldError]:
        """Return every field error; empty when the location is valid."""
        errors = []
        for name in ("address", "city", "postal_code"):
            value = getattr(self, name)
            if not value or not value.strip():
                errors.append(FieldError(f"location.{name}", f"{name} is required"))
        return errors
