"""Job repository implementation."""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, exists, func, insert, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.repositories import JobRepositoryInterface
from marketplace.config.logging import get_logger
from marketplace.domain.entities.job import Job
from marketplace.domain.exceptions.access_error import NotFoundError
from marketplace.domain.exceptions.lifecycle_error import InvalidStateError
from marketplace.domain.value_objects.budget import Budget, Currency
from marketplace.domain.value_objects.event_details import (
    EventDetails,
    EventType,
    JobCategory,
)
from marketplace.domain.value_objects.job_status import JobPriority, JobStatus
from marketplace.domain.value_objects.location import Location
from marketplace.infrastructure.database.models.job import JobModel
from marketplace.infrastructure.database.models.job_view import JobViewModel
from marketplace.infrastructure.database.models.proposal import ProposalModel

logger = get_logger(__name__)

_BIDDABLE = (JobStatus.OPEN.value, JobStatus.IN_REVIEW.value)


class JobRepository(JobRepositoryInterface):
    """Job repository implementation.

    Status changes that race with other requests (expiry, slot claims,
    assignment) are single conditional UPDATE statements, never
    read-modify-write.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID, persisting lazy expiry when the event has passed."""
        stmt = (
            select(JobModel)
            .where(JobModel.id == job_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None

        job = self._model_to_entity(model, await self._received_proposal_ids(job_id))
        if job.refresh_expiry():
            await self._persist_expiry(job_id)
        return job

    async def create(self, job: Job) -> Job:
        """Create a new job."""
        job_model = JobModel(
            id=job.id,
            client_id=job.client_id,
            status=job.status.value,
            priority=job.priority.value,
            accepting_applications=job.accepting_applications,
            max_applications=job.max_applications,
            applications_received=job.applications_count,
            assigned_artist_id=job.assigned_artist_id,
            selected_proposal_id=job.selected_proposal_id,
            views=job.views,
            created_at=job.created_at,
            updated_at=job.updated_at,
            **self._descriptive_columns(job),
        )

        self.db.add(job_model)
        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()
        await self.db.refresh(job_model)

        return self._model_to_entity(job_model, list(job.received_proposal_ids))

    async def update(
        self, job: Job, expected_status: Optional[JobStatus] = None
    ) -> Job:
        """Update descriptive fields, policy and status of an existing job.

        Counters and the assignment pair are left to their atomic paths.
        """
        stmt = update(JobModel).where(JobModel.id == job.id)
        if expected_status is not None:
            stmt = stmt.where(JobModel.status == expected_status.value)
        stmt = stmt.values(
            status=job.status.value,
            priority=job.priority.value,
            accepting_applications=job.accepting_applications,
            max_applications=job.max_applications,
            updated_at=job.updated_at,
            **self._descriptive_columns(job),
        ).execution_options(synchronize_session=False)

        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            if not await self._exists(job.id):
                raise NotFoundError("Job", job.id)
            raise InvalidStateError(
                "Job was modified concurrently; reload and retry",
                current_status=expected_status.value if expected_status else None,
            )
        return job

    async def delete(self, job_id: UUID) -> bool:
        """Delete a job and its view records."""
        await self.db.execute(delete(JobViewModel).where(JobViewModel.job_id == job_id))
        result = await self.db.execute(delete(JobModel).where(JobModel.id == job_id))
        return result.rowcount > 0

    async def record_view(self, job_id: UUID, artist_id: Optional[UUID] = None) -> bool:
        """Count a view without loading or validating the row."""
        stmt = (
            update(JobModel)
            .where(JobModel.id == job_id)
            .values(views=JobModel.views + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            return False

        if artist_id is not None:
            await self._remember_viewer(job_id, artist_id)
        return True

    async def claim_application_slot(self, job_id: UUID) -> bool:
        """Increment the received counter only while below max_applications."""
        stmt = (
            update(JobModel)
            .where(
                JobModel.id == job_id,
                JobModel.status == JobStatus.OPEN.value,
                JobModel.accepting_applications.is_(True),
                JobModel.applications_received < JobModel.max_applications,
            )
            .values(applications_received=JobModel.applications_received + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def assign_if_biddable(
        self, job_id: UUID, artist_id: UUID, proposal_id: UUID
    ) -> bool:
        """Compare-and-swap open/in_review with no selection to assigned."""
        now = datetime.now(timezone.utc)
        stmt = (
            update(JobModel)
            .where(
                JobModel.id == job_id,
                JobModel.status.in_(_BIDDABLE),
                JobModel.selected_proposal_id.is_(None),
                # An open job whose event has passed counts as expired.
                or_(
                    JobModel.status == JobStatus.IN_REVIEW.value,
                    JobModel.event_date >= now,
                ),
            )
            .values(
                status=JobStatus.ASSIGNED.value,
                assigned_artist_id=artist_id,
                selected_proposal_id=proposal_id,
                accepting_applications=False,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        won = result.rowcount == 1

        logger.debug(
            "Job assignment compare-and-swap",
            job_id=str(job_id),
            proposal_id=str(proposal_id),
            won=won,
        )
        return won

    async def list_by_client(
        self,
        client_id: UUID,
        status: Optional[JobStatus] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Job], int]:
        """List a client's jobs, newest first, with the total count."""
        expired = await self._expire_where(JobModel.client_id == client_id)
        if expired:
            logger.info("Jobs expired on read", client_id=str(client_id), count=expired)

        conditions = [JobModel.client_id == client_id]
        if status is not None:
            conditions.append(JobModel.status == status.value)

        total = await self.db.scalar(select(func.count(JobModel.id)).where(*conditions))
        stmt = (
            select(JobModel)
            .where(*conditions)
            .order_by(JobModel.created_at.desc())
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        models = result.scalars().all()

        proposal_ids = await self._received_proposal_ids_by_job([m.id for m in models])
        jobs = [self._model_to_entity(m, proposal_ids.get(m.id, [])) for m in models]
        return jobs, total or 0

    async def _persist_expiry(self, job_id: UUID) -> None:
        if await self._expire_where(JobModel.id == job_id):
            logger.info("Job expired on read", job_id=str(job_id))

    async def _expire_where(self, *conditions) -> int:
        """Expire matching open jobs whose event has passed; returns the count."""
        now = datetime.now(timezone.utc)
        stmt = (
            update(JobModel)
            .where(
                *conditions,
                JobModel.status == JobStatus.OPEN.value,
                JobModel.event_date < now,
            )
            .values(
                status=JobStatus.EXPIRED.value,
                accepting_applications=False,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def _remember_viewer(self, job_id: UUID, artist_id: UUID) -> None:
        values = {
            "job_id": job_id,
            "artist_id": artist_id,
            "viewed_at": datetime.now(timezone.utc),
        }
        dialect = self.db.get_bind().dialect.name

        if dialect == "postgresql":
            stmt = postgresql.insert(JobViewModel).values(**values)
            await self.db.execute(stmt.on_conflict_do_nothing())
        elif dialect == "sqlite":
            stmt = sqlite.insert(JobViewModel).values(**values)
            await self.db.execute(stmt.on_conflict_do_nothing())
        else:
            already = await self.db.scalar(
                select(
                    exists().where(
                        JobViewModel.job_id == job_id,
                        JobViewModel.artist_id == artist_id,
                    )
                )
            )
            if not already:
                await self.db.execute(insert(JobViewModel).values(**values))

    async def _received_proposal_ids(self, job_id: UUID) -> List[UUID]:
        stmt = (
            select(ProposalModel.id)
            .where(ProposalModel.job_id == job_id)
            .order_by(ProposalModel.submitted_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _received_proposal_ids_by_job(
        self, job_ids: List[UUID]
    ) -> Dict[UUID, List[UUID]]:
        if not job_ids:
            return {}
        stmt = (
            select(ProposalModel.job_id, ProposalModel.id)
            .where(ProposalModel.job_id.in_(job_ids))
            .order_by(ProposalModel.submitted_at)
        )
        received: Dict[UUID, List[UUID]] = {}
        for job_id, proposal_id in (await self.db.execute(stmt)).all():
            received.setdefault(job_id, []).append(proposal_id)
        return received

    async def _exists(self, job_id: UUID) -> bool:
        return bool(
            await self.db.scalar(select(exists().where(JobModel.id == job_id)))
        )

    @staticmethod
    def _descriptive_columns(job: Job) -> dict:
        return {
            "title": job.title,
            "description": job.description,
            "category": job.category.value,
            "event_type": job.event_details.event_type.value,
            "event_date": job.event_details.event_date,
            "event_time": job.event_details.event_time,
            "duration_hours": job.event_details.duration_hours,
            "guest_count": job.event_details.guest_count,
            "address": job.location.address,
            "city": job.location.city,
            "state": job.location.state,
            "postal_code": job.location.postal_code,
            "country": job.location.country,
            "budget_min": job.budget.min,
            "budget_max": job.budget.max,
            "currency": job.budget.currency.value,
            "negotiable": job.budget.negotiable,
            "application_deadline": job.application_deadline,
            "expires_at": job.expires_at,
        }

    def _model_to_entity(self, model: JobModel, proposal_ids: List[UUID]) -> Job:
        """Convert SQLAlchemy model to domain entity."""
        return Job(
            id=model.id,
            client_id=model.client_id,
            title=model.title,
            description=model.description,
            category=JobCategory(model.category),
            event_details=EventDetails(
                event_type=EventType(model.event_type),
                event_date=model.event_date,
                event_time=model.event_time,
                duration_hours=model.duration_hours,
                guest_count=model.guest_count,
            ),
            location=Location(
                address=model.address,
                city=model.city,
                state=model.state,
                postal_code=model.postal_code,
                country=model.country,
            ),
            budget=Budget(
                min=model.budget_min,
                max=model.budget_max,
                currency=Currency(model.currency),
                negotiable=model.negotiable,
            ),
            status=JobStatus(model.status),
            priority=JobPriority(model.priority),
            accepting_applications=model.accepting_applications,
            max_applications=model.max_applications,
            received_proposal_ids=proposal_ids,
            assigned_artist_id=model.assigned_artist_id,
            selected_proposal_id=model.selected_proposal_id,
            application_deadline=model.application_deadline,
            expires_at=model.expires_at,
            views=model.views,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
