"""
Proposal status value object.
"""

from enum import Enum


class ProposalStatus(str, Enum):
    """Proposal status enumeration."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    def is_final(self) -> bool:
        """Every status except pending is terminal."""
        return self != ProposalStatus.PENDING


class DurationUnit(str, Enum):
    """Unit of a proposal's estimated duration."""

    HOURS = "hours"
    DAYS = "days"
