"""Proposal repository implementation."""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import exists, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.repositories import (
    ProposalRepositoryInterface,
)
from marketplace.config.logging import get_logger
from marketplace.domain.entities.proposal import Proposal, ProposalBid
from marketplace.domain.exceptions.access_error import NotFoundError
from marketplace.domain.exceptions.lifecycle_error import (
    ConflictError,
    InvalidStateError,
)
from marketplace.domain.value_objects.budget import Currency
from marketplace.domain.value_objects.pricing import (
    ClientResponse,
    EstimatedDuration,
    Pricing,
    ProposalTerms,
)
from marketplace.domain.value_objects.proposal_status import (
    DurationUnit,
    ProposalStatus,
)
from marketplace.infrastructure.database.models.proposal import ProposalModel

logger = get_logger(__name__)


class ProposalRepository(ProposalRepositoryInterface):
    """Proposal repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, proposal_id: UUID) -> Optional[Proposal]:
        """Get proposal by ID."""
        stmt = (
            select(ProposalModel)
            .where(ProposalModel.id == proposal_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def find_by_job_and_artist(
        self, job_id: UUID, artist_id: UUID
    ) -> Optional[Proposal]:
        stmt = select(ProposalModel).where(
            ProposalModel.job_id == job_id,
            ProposalModel.artist_id == artist_id,
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def create(self, proposal: Proposal) -> Proposal:
        """Create a new proposal."""
        proposal_model = ProposalModel(
            id=proposal.id,
            job_id=proposal.job_id,
            artist_id=proposal.artist_id,
            status=proposal.status.value,
            submitted_at=proposal.submitted_at,
            created_at=proposal.submitted_at,
            updated_at=proposal.updated_at,
            **self._bid_columns(proposal.bid),
        )

        self.db.add(proposal_model)
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.info(
                "Duplicate proposal rejected by unique index",
                job_id=str(proposal.job_id),
                artist_id=str(proposal.artist_id),
                error=str(e.orig),
            )
            raise ConflictError("Artist has already applied to this job") from e

        return self._model_to_entity(proposal_model)

    async def update(
        self, proposal: Proposal, expected_status: Optional[ProposalStatus] = None
    ) -> Proposal:
        """Update an existing proposal."""
        stmt = update(ProposalModel).where(ProposalModel.id == proposal.id)
        if expected_status is not None:
            stmt = stmt.where(ProposalModel.status == expected_status.value)
        stmt = stmt.values(
            status=proposal.status.value,
            updated_at=proposal.updated_at,
            **self._bid_columns(proposal.bid),
            **self._response_columns(proposal.client_response),
        ).execution_options(synchronize_session=False)

        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            found = await self.db.scalar(
                select(exists().where(ProposalModel.id == proposal.id))
            )
            if not found:
                raise NotFoundError("Proposal", proposal.id)
            raise InvalidStateError(
                "Proposal is no longer "
                f"{expected_status.value if expected_status else 'current'}",
                current_status=expected_status.value if expected_status else None,
            )
        return proposal

    async def list_by_job(
        self,
        job_id: UUID,
        status: Optional[ProposalStatus] = None,
        limit: Optional[int] = None,
    ) -> List[Proposal]:
        stmt = select(ProposalModel).where(ProposalModel.job_id == job_id)
        if status is not None:
            stmt = stmt.where(ProposalModel.status == status.value)
        stmt = stmt.order_by(ProposalModel.submitted_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def list_by_artist(
        self,
        artist_id: UUID,
        status: Optional[ProposalStatus] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Proposal], int]:
        conditions = [ProposalModel.artist_id == artist_id]
        if status is not None:
            conditions.append(ProposalModel.status == status.value)

        total = await self.db.scalar(
            select(func.count(ProposalModel.id)).where(*conditions)
        )
        stmt = (
            select(ProposalModel)
            .where(*conditions)
            .order_by(ProposalModel.submitted_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)

        return [self._model_to_entity(m) for m in result.scalars().all()], total or 0

    async def count_by_status(self, artist_id: UUID) -> Dict[str, int]:
        stmt = (
            select(ProposalModel.status, func.count(ProposalModel.id))
            .where(ProposalModel.artist_id == artist_id)
            .group_by(ProposalModel.status)
        )
        result = await self.db.execute(stmt)
        return {status: count for status, count in result.all()}

    async def accept_if_pending(
        self, proposal_id: UUID, client_id: UUID, responded_at: datetime
    ) -> bool:
        stmt = (
            update(ProposalModel)
            .where(
                ProposalModel.id == proposal_id,
                ProposalModel.status == ProposalStatus.PENDING.value,
            )
            .values(
                status=ProposalStatus.ACCEPTED.value,
                responded_by=client_id,
                responded_at=responded_at,
                response_message=None,
                updated_at=responded_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def reject_pending_siblings(
        self,
        job_id: UUID,
        accepted_proposal_id: UUID,
        client_id: UUID,
        message: str,
        responded_at: datetime,
    ) -> List[UUID]:
        stmt = (
            update(ProposalModel)
            .where(
                ProposalModel.job_id == job_id,
                ProposalModel.id != accepted_proposal_id,
                ProposalModel.status == ProposalStatus.PENDING.value,
            )
            .values(
                status=ProposalStatus.REJECTED.value,
                responded_by=client_id,
                responded_at=responded_at,
                response_message=message,
                updated_at=responded_at,
            )
            .returning(ProposalModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        rejected = list(result.scalars().all())

        logger.debug(
            "Rejected sibling proposals", job_id=str(job_id), count=len(rejected)
        )
        return rejected

    @staticmethod
    def _bid_columns(bid: ProposalBid) -> dict:
        return {
            "message": bid.message.strip(),
            "total_price": bid.pricing.total_price,
            "currency": bid.pricing.currency.value,
            "duration_value": bid.estimated_duration.value,
            "duration_unit": bid.estimated_duration.unit.value,
            "years_of_experience": bid.years_of_experience,
            "relevant_experience": bid.relevant_experience,
            "cover_letter": bid.cover_letter,
            "payment_terms": bid.terms.payment_terms,
            "cancellation_policy": bid.terms.cancellation_policy,
            "additional_notes": bid.terms.additional_notes,
        }

    @staticmethod
    def _response_columns(response: Optional[ClientResponse]) -> dict:
        if response is None:
            return {"responded_by": None, "responded_at": None, "response_message": None}
        return {
            "responded_by": response.responded_by,
            "responded_at": response.responded_at,
            "response_message": response.message,
        }

    def _model_to_entity(self, model: ProposalModel) -> Proposal:
        """Convert SQLAlchemy model to domain entity."""
        client_response = None
        if model.responded_by is not None:
            client_response = ClientResponse(
                responded_by=model.responded_by,
                responded_at=model.responded_at or datetime.now(timezone.utc),
                message=model.response_message,
            )

        return Proposal(
            id=model.id,
            job_id=model.job_id,
            artist_id=model.artist_id,
            bid=ProposalBid(
                message=model.message,
                pricing=Pricing(
                    total_price=model.total_price, currency=Currency(model.currency)
                ),
                estimated_duration=EstimatedDuration(
                    value=model.duration_value, unit=DurationUnit(model.duration_unit)
                ),
                years_of_experience=model.years_of_experience,
                relevant_experience=model.relevant_experience,
                cover_letter=model.cover_letter,
                terms=ProposalTerms(
                    payment_terms=model.payment_terms,
                    cancellation_policy=model.cancellation_policy,
                    additional_notes=model.additional_notes,
                ),
            ),
            status=ProposalStatus(model.status),
            client_response=client_response,
            submitted_at=model.submitted_at,
            updated_at=model.updated_at,
        )
