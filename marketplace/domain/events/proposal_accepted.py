"""
Proposal accepted domain event.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID


@dataclass
class ProposalAccepted:
    """Event raised when a job's winning proposal is committed."""

    job_id: UUID
    proposal_id: UUID
    artist_id: UUID
    accepted_at: datetime
    rejected_proposal_ids: List[UUID] = field(default_factory=list)
