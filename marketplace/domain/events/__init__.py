"""
Domain events package.
"""

from .job_created import JobCreated
from .proposal_accepted import ProposalAccepted

__all__ = [
    "JobCreated",
    "ProposalAccepted",
]
