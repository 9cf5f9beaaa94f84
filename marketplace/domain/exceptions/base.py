"""
Base domain exception.
"""


class DomainError(Exception):
    """Base exception for every error raised by the marketplace core."""

    pass
