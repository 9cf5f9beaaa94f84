"""
Access-related domain exceptions.
"""

from .base import DomainError


class ForbiddenError(DomainError):
    """Raised when the caller lacks rights over a resource."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a referenced resource does not exist."""

    def __init__(self, resource: str, resource_id):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")
