"""
Validation-related domain exceptions.
"""

from dataclasses import dataclass
from typing import Iterable, List

from .base import DomainError


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ValidationError(DomainError):
    """Raised when input is malformed or out of range.

    Carries every field-level failure found, not just the first one.
    """

    def __init__(self, errors: Iterable[FieldError]):
        self.errors: List[FieldError] = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field, message)])


class ErrorCollector:
    """Accumulates field errors and raises them together."""

    def __init__(self):
        self.errors: List[FieldError] = []

    def add(self, field: str, message: str) -> None:
        self.errors.append(FieldError(field, message))

    def check(self, condition: bool, field: str, message: str) -> None:
        if not condition:
            self.add(field, message)

    def extend(self, errors: Iterable[FieldError], prefix: str = "") -> None:
        for error in errors:
            name = f"{prefix}.{error.field}" if prefix else error.field
            self.errors.append(FieldError(name, error.message))

    def raise_if_any(self) -> None:
        if self.errors:
            raise ValidationError(self.errors)
