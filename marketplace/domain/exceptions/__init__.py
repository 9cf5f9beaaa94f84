"""
Domain exceptions package.
"""

from .access_error import ForbiddenError, NotFoundError
from .base import DomainError
from .lifecycle_error import ConflictError, InvalidStateError
from .validation_error import ErrorCollector, FieldError, ValidationError

__all__ = [
    "DomainError",
    "ErrorCollector",
    "FieldError",
    "ValidationError",
    "ForbiddenError",
    "NotFoundError",
    "InvalidStateError",
    "ConflictError",
]
