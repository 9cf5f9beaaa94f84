"""
Lifecycle-related domain exceptions.
"""

from .base import DomainError


class InvalidStateError(DomainError):
    """Raised when an operation is not permitted in the current lifecycle state."""

    def __init__(self, message: str, current_status: str = None):
        self.current_status = current_status
        super().__init__(message)


class ConflictError(DomainError):
    """Raised on a uniqueness violation (duplicate proposal or review)."""

    pass
