"""
Job created domain event.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class JobCreated:
    """Event raised after a job is committed; consumed by the notification fan-out."""

    job_id: UUID
    client_id: UUID
    created_at: datetime
