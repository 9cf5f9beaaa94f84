"""
Unit tests for proposal use cases.
"""

import asyncio
import copy
from decimal import Decimal
from uuid import uuid4

import pytest

from marketplace.application.use_cases.accept_proposal import AcceptProposalUseCase
from marketplace.application.use_cases.proposal_queries import ProposalQueries
from marketplace.application.use_cases.reject_proposal import RejectProposalUseCase
from marketplace.application.use_cases.submit_proposal import (
    SubmitProposalRequest,
    SubmitProposalUseCase,
)
from marketplace.application.use_cases.update_proposal import UpdateProposalUseCase
from marketplace.application.use_cases.withdraw_proposal import (
    WithdrawProposalUseCase,
)
from marketplace.domain.entities.proposal import SIBLING_REJECTION_MESSAGE
from marketplace.domain.exceptions.access_error import ForbiddenError, NotFoundError
from marketplace.domain.exceptions.lifecycle_error import (
    ConflictError,
    InvalidStateError,
)
from marketplace.domain.exceptions.validation_error import ValidationError
from marketplace.domain.value_objects.job_status import JobStatus
from marketplace.domain.value_objects.pricing import Pricing
from marketplace.domain.value_objects.proposal_status import ProposalStatus


class InMemoryJobStore:
    """Job store whose assignment is an atomic compare-and-swap."""

    def __init__(self, jobs):
        self.jobs = {job.id: job for job in jobs}

    async def get_by_id(self, job_id):
        await asyncio.sleep(0)
        job = self.jobs.get(job_id)
        return copy.deepcopy(job) if job else None

    async def assign_if_biddable(self, job_id, artist_id, proposal_id):
        await asyncio.sleep(0)
        job = self.jobs[job_id]
        if not job.status.is_biddable() or job.is_assigned:
            return False
        job.assign_artist(artist_id, proposal_id)
        return True


class InMemoryProposalStore:
    """Proposal store with conditional accept and sibling rejection."""

    def __init__(self, proposals):
        self.proposals = {p.id: p for p in proposals}

    async def get_by_id(self, proposal_id):
        await asyncio.sleep(0)
        proposal = self.proposals.get(proposal_id)
        return copy.deepcopy(proposal) if proposal else None

    async def accept_if_pending(self, proposal_id, client_id, responded_at):
        proposal = self.proposals[proposal_id]
        if not proposal.is_pending:
            return False
        proposal.accept(client_id, responded_at)
        return True

    async def reject_pending_siblings(
        self, job_id, accepted_proposal_id, client_id, message, responded_at
    ):
        rejected = []
        for proposal in self.proposals.values():
            if (
                proposal.job_id == job_id
                and proposal.id != accepted_proposal_id
                and proposal.is_pending
            ):
                proposal.reject(client_id, message, responded_at)
                rejected.append(proposal.id)
        return rejected


class TestSubmitProposalUseCase:
    """Test cases for SubmitProposalUseCase."""

    @pytest.fixture
    def use_case(
        self, mock_job_repository, mock_proposal_repository, mock_transaction_service
    ):
        mock_proposal_repository.create.side_effect = lambda proposal: proposal
        return SubmitProposalUseCase(
            mock_job_repository, mock_proposal_repository, mock_transaction_service
        )

    @pytest.fixture
    def job(self, make_job, mock_job_repository, mock_proposal_repository):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job
        mock_job_repository.claim_application_slot.return_value = True
        mock_proposal_repository.find_by_job_and_artist.return_value = None
        return job

    @pytest.mark.asyncio
    async def test_submit_success(self, use_case, job, make_bid, mock_job_repository):
        artist_id = uuid4()

        proposal = await use_case.execute(
            SubmitProposalRequest(job_id=job.id, artist_id=artist_id, bid=make_bid())
        )

        assert proposal.status == ProposalStatus.PENDING
        assert proposal.artist_id == artist_id
        assert job.received_proposal_ids == [proposal.id]
        mock_job_repository.claim_application_slot.assert_awaited_once_with(job.id)

    @pytest.mark.asyncio
    async def test_duplicate_submission(
        self, use_case, job, make_bid, make_proposal, mock_proposal_repository
    ):
        existing = make_proposal(job)
        mock_proposal_repository.find_by_job_and_artist.return_value = existing

        with pytest.raises(ConflictError):
            await use_case.execute(
                SubmitProposalRequest(
                    job_id=job.id, artist_id=existing.artist_id, bid=make_bid()
                )
            )

        mock_proposal_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_full_job(
        self, use_case, job, make_bid, mock_job_repository, mock_proposal_repository
    ):
        mock_job_repository.claim_application_slot.return_value = False

        with pytest.raises(InvalidStateError) as exc_info:
            await use_case.execute(
                SubmitProposalRequest(job_id=job.id, artist_id=uuid4(), bid=make_bid())
            )

        assert "maximum number of applications" in str(exc_info.value)
        mock_proposal_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_closed_job(self, use_case, job, make_bid, mock_job_repository):
        job.transition_to(JobStatus.CANCELLED)

        with pytest.raises(InvalidStateError) as exc_info:
            await use_case.execute(
                SubmitProposalRequest(job_id=job.id, artist_id=uuid4(), bid=make_bid())
            )

        assert exc_info.value.current_status == "cancelled"
        mock_job_repository.claim_application_slot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_bid_never_reaches_storage(
        self, use_case, job, make_bid, mock_transaction_service
    ):
        with pytest.raises(ValidationError):
            await use_case.execute(
                SubmitProposalRequest(
                    job_id=job.id,
                    artist_id=uuid4(),
                    bid=make_bid(pricing=Pricing(total_price=Decimal("1"))),
                )
            )

        mock_transaction_service.execute_in_transaction.assert_not_awaited()


class TestAcceptProposalUseCase:
    """Test cases for AcceptProposalUseCase."""

    @pytest.fixture
    def use_case(
        self, mock_job_repository, mock_proposal_repository, mock_transaction_service
    ):
        return AcceptProposalUseCase(
            mock_job_repository, mock_proposal_repository, mock_transaction_service
        )

    @pytest.fixture
    def job(self, make_job, mock_job_repository):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job
        return job

    @pytest.fixture
    def proposal(self, job, make_proposal, mock_proposal_repository):
        proposal = make_proposal(job)
        job.register_proposal(proposal.id)
        mock_proposal_repository.get_by_id.return_value = proposal
        return proposal

    @pytest.mark.asyncio
    async def test_accept_assigns_job_and_rejects_siblings(
        self, use_case, job, proposal, mock_job_repository, mock_proposal_repository
    ):
        sibling_ids = [uuid4(), uuid4()]
        mock_job_repository.assign_if_biddable.return_value = True
        mock_proposal_repository.accept_if_pending.return_value = True
        mock_proposal_repository.reject_pending_siblings.return_value = sibling_ids

        result = await use_case.execute(proposal.id, job.client_id)

        assert result.proposal.status == ProposalStatus.ACCEPTED
        assert result.job.status == JobStatus.ASSIGNED
        assert result.job.assigned_artist_id == proposal.artist_id
        assert result.job.selected_proposal_id == proposal.id
        assert result.event.rejected_proposal_ids == sibling_ids
        mock_job_repository.assign_if_biddable.assert_awaited_once_with(
            job.id, proposal.artist_id, proposal.id
        )
        kwargs = mock_proposal_repository.reject_pending_siblings.await_args.kwargs
        assert kwargs["accepted_proposal_id"] == proposal.id
        assert kwargs["message"] == SIBLING_REJECTION_MESSAGE

    @pytest.mark.asyncio
    async def test_lost_race(
        self, use_case, job, proposal, mock_job_repository, mock_proposal_repository
    ):
        mock_job_repository.assign_if_biddable.return_value = False

        with pytest.raises(InvalidStateError):
            await use_case.execute(proposal.id, job.client_id)

        mock_proposal_repository.accept_if_pending.assert_not_awaited()
        mock_proposal_repository.reject_pending_siblings.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_proposal_withdrawn_concurrently(
        self, use_case, job, proposal, mock_job_repository, mock_proposal_repository
    ):
        mock_job_repository.assign_if_biddable.return_value = True
        mock_proposal_repository.accept_if_pending.return_value = False

        with pytest.raises(InvalidStateError):
            await use_case.execute(proposal.id, job.client_id)

        mock_proposal_repository.reject_pending_siblings.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_owner_can_accept(
        self, use_case, job, proposal, mock_job_repository
    ):
        with pytest.raises(ForbiddenError):
            await use_case.execute(proposal.id, uuid4())

        mock_job_repository.assign_if_biddable.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cannot_accept_on_assigned_job(
        self, use_case, job, proposal, mock_job_repository
    ):
        job.assign_artist(uuid4(), uuid4())

        with pytest.raises(InvalidStateError):
            await use_case.execute(proposal.id, job.client_id)

        mock_job_repository.assign_if_biddable.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_proposal(self, use_case, mock_proposal_repository):
        mock_proposal_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await use_case.execute(uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_concurrent_accepts_have_one_winner(
        self, make_job, make_proposal, mock_transaction_service
    ):
        job = make_job()
        proposals = [make_proposal(job) for _ in range(3)]
        for proposal in proposals:
            job.register_proposal(proposal.id)

        jobs = InMemoryJobStore([job])
        store = InMemoryProposalStore(proposals)
        use_case = AcceptProposalUseCase(jobs, store, mock_transaction_service)

        outcomes = await asyncio.gather(
            use_case.execute(proposals[0].id, job.client_id),
            use_case.execute(proposals[1].id, job.client_id),
            return_exceptions=True,
        )

        winners = [o for o in outcomes if not isinstance(o, Exception)]
        losers = [o for o in outcomes if isinstance(o, Exception)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert isinstance(losers[0], InvalidStateError)

        winner_id = winners[0].proposal.id
        stored_job = jobs.jobs[job.id]
        assert stored_job.status == JobStatus.ASSIGNED
        assert stored_job.selected_proposal_id == winner_id

        statuses = {p.id: p.status for p in store.proposals.values()}
        assert list(statuses.values()).count(ProposalStatus.ACCEPTED) == 1
        assert statuses[winner_id] == ProposalStatus.ACCEPTED
        for proposal_id, status in statuses.items():
            if proposal_id != winner_id:
                assert status == ProposalStatus.REJECTED
                assert (
                    store.proposals[proposal_id].client_response.message
                    == SIBLING_REJECTION_MESSAGE
                )


class TestRejectProposalUseCase:
    """Test cases for RejectProposalUseCase."""

    @pytest.fixture
    def use_case(
        self, mock_job_repository, mock_proposal_repository, mock_transaction_service
    ):
        mock_proposal_repository.update.side_effect = (
            lambda proposal, expected_status: proposal
        )
        return RejectProposalUseCase(
            mock_job_repository, mock_proposal_repository, mock_transaction_service
        )

    @pytest.mark.asyncio
    async def test_owner_rejects(
        self,
        use_case,
        make_job,
        make_proposal,
        mock_job_repository,
        mock_proposal_repository,
    ):
        job = make_job()
        proposal = make_proposal(job)
        mock_job_repository.get_by_id.return_value = job
        mock_proposal_repository.get_by_id.return_value = proposal

        result = await use_case.execute(proposal.id, job.client_id, "Over budget")

        assert result.status == ProposalStatus.REJECTED
        assert result.client_response.message == "Over budget"
        mock_proposal_repository.update.assert_awaited_once_with(
            proposal, expected_status=ProposalStatus.PENDING
        )

    @pytest.mark.asyncio
    async def test_non_owner_cannot_reject(
        self,
        use_case,
        make_job,
        make_proposal,
        mock_job_repository,
        mock_proposal_repository,
    ):
        job = make_job()
        proposal = make_proposal(job)
        mock_job_repository.get_by_id.return_value = job
        mock_proposal_repository.get_by_id.return_value = proposal

        with pytest.raises(ForbiddenError):
            await use_case.execute(proposal.id, uuid4())

        assert proposal.status == ProposalStatus.PENDING


class TestWithdrawProposalUseCase:
    """Test cases for WithdrawProposalUseCase."""

    @pytest.fixture
    def use_case(self, mock_proposal_repository, mock_transaction_service):
        mock_proposal_repository.update.side_effect = (
            lambda proposal, expected_status: proposal
        )
        return WithdrawProposalUseCase(mock_proposal_repository, mock_transaction_service)

    @pytest.mark.asyncio
    async def test_artist_withdraws(
        self, use_case, make_job, make_proposal, mock_proposal_repository
    ):
        proposal = make_proposal(make_job())
        mock_proposal_repository.get_by_id.return_value = proposal

        result = await use_case.execute(proposal.id, proposal.artist_id)

        assert result.status == ProposalStatus.WITHDRAWN

    @pytest.mark.asyncio
    async def test_other_artist_cannot_withdraw(
        self, use_case, make_job, make_proposal, mock_proposal_repository
    ):
        proposal = make_proposal(make_job())
        mock_proposal_repository.get_by_id.return_value = proposal

        with pytest.raises(ForbiddenError):
            await use_case.execute(proposal.id, uuid4())

    @pytest.mark.asyncio
    async def test_accepted_proposal_cannot_be_withdrawn(
        self, use_case, make_job, make_proposal, mock_proposal_repository
    ):
        proposal = make_proposal(make_job())
        proposal.accept(uuid4())
        mock_proposal_repository.get_by_id.return_value = proposal

        with pytest.raises(InvalidStateError):
            await use_case.execute(proposal.id, proposal.artist_id)

        mock_proposal_repository.update.assert_not_awaited()


class TestUpdateProposalUseCase:
    """Test cases for UpdateProposalUseCase."""

    @pytest.mark.asyncio
    async def test_artist_revises_bid(
        self,
        make_job,
        make_proposal,
        make_bid,
        mock_proposal_repository,
        mock_transaction_service,
    ):
        proposal = make_proposal(make_job())
        mock_proposal_repository.get_by_id.return_value = proposal
        mock_proposal_repository.update.side_effect = (
            lambda proposal, expected_status: proposal
        )
        use_case = UpdateProposalUseCase(mock_proposal_repository, mock_transaction_service)

        result = await use_case.execute(
            proposal.id,
            proposal.artist_id,
            make_bid(pricing=Pricing(total_price=Decimal("275"))),
        )

        assert result.bid.pricing.total_price == Decimal("275")
        mock_proposal_repository.update.assert_awaited_once_with(
            proposal, expected_status=ProposalStatus.PENDING
        )


class TestProposalQueries:
    """Test cases for ProposalQueries."""

    @pytest.fixture
    def queries(
        self, mock_job_repository, mock_proposal_repository, mock_transaction_service
    ):
        return ProposalQueries(
            mock_job_repository, mock_proposal_repository, mock_transaction_service
        )

    @pytest.fixture
    def job_and_proposal(
        self, make_job, make_proposal, mock_job_repository, mock_proposal_repository
    ):
        job = make_job()
        proposal = make_proposal(job)
        mock_job_repository.get_by_id.return_value = job
        mock_proposal_repository.get_by_id.return_value = proposal
        return job, proposal

    @pytest.mark.asyncio
    async def test_visible_to_artist_and_owner(self, queries, job_and_proposal):
        job, proposal = job_and_proposal

        assert await queries.get_proposal(proposal.id, proposal.artist_id) is proposal
        assert await queries.get_proposal(proposal.id, job.client_id) is proposal

    @pytest.mark.asyncio
    async def test_hidden_from_others(self, queries, job_and_proposal):
        _, proposal = job_and_proposal

        with pytest.raises(ForbiddenError):
            await queries.get_proposal(proposal.id, uuid4())

    @pytest.mark.asyncio
    async def test_list_job_proposals_requires_owner(
        self, queries, job_and_proposal, mock_proposal_repository
    ):
        job, proposal = job_and_proposal
        mock_proposal_repository.list_by_job.return_value = [proposal]

        assert await queries.list_job_proposals(job.id, job.client_id) == [proposal]
        with pytest.raises(ForbiddenError):
            await queries.list_job_proposals(job.id, uuid4())

    @pytest.mark.asyncio
    async def test_list_artist_proposals_paginates(
        self, queries, job_and_proposal, mock_proposal_repository
    ):
        _, proposal = job_and_proposal
        mock_proposal_repository.list_by_artist.return_value = ([proposal], 21)

        page = await queries.list_artist_proposals(proposal.artist_id, page=3, limit=10)

        assert page.items == [proposal]
        assert page.pages == 3
        mock_proposal_repository.list_by_artist.assert_awaited_once_with(
            proposal.artist_id, status=None, skip=20, limit=10
        )

    @pytest.mark.asyncio
    async def test_artist_stats_fill_missing_statuses(
        self, queries, mock_proposal_repository
    ):
        mock_proposal_repository.count_by_status.return_value = {
            "pending": 2,
            "accepted": 1,
        }

        stats = await queries.artist_stats(uuid4())

        assert stats == {
            "pending": 2,
            "accepted": 1,
            "rejected": 0,
            "withdrawn": 0,
            "total": 3,
        }
