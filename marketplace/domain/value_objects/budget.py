"""
Budget value object.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List

from marketplace.domain.exceptions.validation_error import FieldError

MIN_BUDGET = Decimal("50")


class Currency(str, Enum):
    """Supported currencies."""

    GBP = "GBP"
    EUR = "EUR"
    USD = "USD"


@dataclass(frozen=True)
class Budget:
    """Budget range offered by a client."""

    min: Decimal
    max: Decimal
    currency: Currency = Currency.GBP
    negotiable: bool = True

    def validate(self) -> List[FieldError]:
        """Return every field error; empty when the budget is valid."""
        errors = []
        if self.min < MIN_BUDGET:
            errors.append(
                FieldError("budget.min", f"Minimum budget must be at least {MIN_BUDGET}")
            )
        if self.max <= self.min:
            errors.append(
                FieldError("budget.max", "Maximum budget must be greater than minimum")
            )
        return errors
