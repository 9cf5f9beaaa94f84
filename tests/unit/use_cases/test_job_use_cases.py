"""
Unit tests for job use cases.
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from marketplace.application.interfaces.services import NotificationFanoutInterface
from marketplace.application.use_cases.change_job_status import ChangeJobStatusUseCase
from marketplace.application.use_cases.check_application_eligibility import (
    CheckApplicationEligibilityUseCase,
)
from marketplace.application.use_cases.create_job import (
    CreateJobRequest,
    CreateJobUseCase,
)
from marketplace.application.use_cases.delete_job import DeleteJobUseCase
from marketplace.application.use_cases.get_job import GetJobUseCase
from marketplace.application.use_cases.list_client_jobs import ListClientJobsUseCase
from marketplace.application.use_cases.update_job import (
    UpdateJobRequest,
    UpdateJobUseCase,
)
from marketplace.domain.entities.notification import Notification, NotificationType
from marketplace.domain.exceptions.access_error import ForbiddenError, NotFoundError
from marketplace.domain.exceptions.lifecycle_error import InvalidStateError
from marketplace.domain.exceptions.validation_error import ValidationError
from marketplace.domain.value_objects.budget import Budget
from marketplace.domain.value_objects.event_details import JobCategory
from marketplace.domain.value_objects.job_status import JobPriority, JobStatus
from marketplace.domain.value_objects.location import Location
from marketplace.domain.value_objects.principal import Principal, UserType


class TestCreateJobUseCase:
    """Test cases for CreateJobUseCase."""

    @pytest.fixture
    def mock_fanout(self):
        return AsyncMock(spec=NotificationFanoutInterface)

    @pytest.fixture
    def use_case(self, mock_job_repository, mock_fanout, mock_transaction_service):
        mock_job_repository.create.side_effect = lambda job: job
        return CreateJobUseCase(
            job_repo=mock_job_repository,
            notification_fanout=mock_fanout,
            transaction_service=mock_transaction_service,
        )

    @pytest.fixture
    def request_data(self, event_details):
        return CreateJobRequest(
            client_id=uuid4(),
            title="Bridal henna for wedding",
            description="Full bridal henna for both hands and feet with matching motifs.",
            category=JobCategory.BRIDAL,
            event_details=event_details,
            location=Location(address="1 High Street", city="London", postal_code="E1 6AN"),
            budget=Budget(min=Decimal("200"), max=Decimal("400")),
            priority=JobPriority.URGENT,
        )

    @pytest.mark.asyncio
    async def test_create_job_success(self, use_case, request_data, mock_fanout):
        notification = Notification(
            recipient_id=uuid4(),
            type=NotificationType.NEW_JOB_POSTED,
            title="New bridal job available",
            message="A new job has been posted",
        )
        mock_fanout.notify_artists_of_new_job.return_value = [notification]

        result = await use_case.execute(request_data)

        assert result.job.status == JobStatus.OPEN
        assert result.job.priority == JobPriority.URGENT
        assert result.event.job_id == result.job.id
        assert result.event.client_id == request_data.client_id
        assert result.notifications == [notification]
        mock_fanout.notify_artists_of_new_job.assert_awaited_once_with(result.job)

    @pytest.mark.asyncio
    async def test_invalid_job_is_not_persisted(
        self, use_case, request_data, mock_job_repository, mock_fanout
    ):
        request_data.title = "Hi"

        with pytest.raises(ValidationError):
            await use_case.execute(request_data)

        mock_job_repository.create.assert_not_awaited()
        mock_fanout.notify_artists_of_new_job.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fanout_failure_does_not_fail_creation(
        self, use_case, request_data, mock_fanout
    ):
        mock_fanout.notify_artists_of_new_job.side_effect = RuntimeError("db gone")

        result = await use_case.execute(request_data)

        assert result.job.status == JobStatus.OPEN
        assert result.notifications == []


class TestGetJobUseCase:
    """Test cases for GetJobUseCase."""

    @pytest.fixture
    def use_case(self, mock_job_repository, mock_transaction_service):
        return GetJobUseCase(mock_job_repository, mock_transaction_service)

    @pytest.mark.asyncio
    async def test_artist_view_is_remembered(self, use_case, mock_job_repository, make_job):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job
        mock_job_repository.record_view.return_value = True
        artist = Principal(id=uuid4(), user_type=UserType.ARTIST)

        result = await use_case.execute(job.id, artist)

        assert result.views == 1
        mock_job_repository.record_view.assert_awaited_once_with(job.id, artist.id)

    @pytest.mark.asyncio
    async def test_anonymous_and_client_views_are_counted_only(
        self, use_case, mock_job_repository, make_job
    ):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job
        mock_job_repository.record_view.return_value = True

        await use_case.execute(job.id)
        await use_case.execute(job.id, Principal(id=uuid4(), user_type=UserType.CLIENT))

        for call in mock_job_repository.record_view.await_args_list:
            assert call.args == (job.id, None)

    @pytest.mark.asyncio
    async def test_missing_job(self, use_case, mock_job_repository):
        mock_job_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await use_case.execute(uuid4())


class TestUpdateJobUseCase:
    """Test cases for UpdateJobUseCase."""

    @pytest.fixture
    def use_case(self, mock_job_repository, mock_transaction_service):
        mock_job_repository.update.side_effect = lambda job, expected_status: job
        return UpdateJobUseCase(mock_job_repository, mock_transaction_service)

    @pytest.mark.asyncio
    async def test_owner_updates(self, use_case, mock_job_repository, make_job):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        result = await use_case.execute(
            UpdateJobRequest(
                job_id=job.id, client_id=job.client_id, title="Mehndi party henna"
            )
        )

        assert result.title == "Mehndi party henna"
        mock_job_repository.update.assert_awaited_once_with(
            job, expected_status=JobStatus.OPEN
        )

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(self, use_case, mock_job_repository, make_job):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                UpdateJobRequest(job_id=job.id, client_id=uuid4(), title="Something else")
            )

        mock_job_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_assigned_job_cannot_be_edited(
        self, use_case, mock_job_repository, make_job
    ):
        job = make_job()
        job.assign_artist(uuid4(), uuid4())
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(InvalidStateError):
            await use_case.execute(
                UpdateJobRequest(job_id=job.id, client_id=job.client_id, title="New title")
            )


class TestDeleteJobUseCase:
    """Test cases for DeleteJobUseCase."""

    @pytest.fixture
    def use_case(self, mock_job_repository, mock_transaction_service):
        return DeleteJobUseCase(mock_job_repository, mock_transaction_service)

    @pytest.mark.asyncio
    async def test_delete_fresh_job(self, use_case, mock_job_repository, make_job):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        await use_case.execute(job.id, job.client_id)

        mock_job_repository.delete.assert_awaited_once_with(job.id)

    @pytest.mark.asyncio
    async def test_job_with_proposals_is_kept(
        self, use_case, mock_job_repository, make_job
    ):
        job = make_job()
        job.register_proposal(uuid4())
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(InvalidStateError) as exc_info:
            await use_case.execute(job.id, job.client_id)

        assert "received proposals" in str(exc_info.value)
        mock_job_repository.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, use_case, mock_job_repository, make_job):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(ForbiddenError):
            await use_case.execute(job.id, uuid4())



class TestListClientJobsUseCase:
    """Test cases for ListClientJobsUseCase."""

    @pytest.mark.asyncio
    async def test_pages_through_client_jobs(
        self, mock_job_repository, mock_transaction_service, make_job
    ):
        client_id = uuid4()
        jobs = [make_job(client_id=client_id) for _ in range(2)]
        mock_job_repository.list_by_client.return_value = (jobs, 12)
        use_case = ListClientJobsUseCase(mock_job_repository, mock_transaction_service)

        result = await use_case.execute(
            client_id, status=JobStatus.OPEN, page=3, limit=5
        )

        assert result.items == jobs
        assert result.total == 12
        assert result.pages == 3
        mock_job_repository.list_by_client.assert_awaited_once_with(
            client_id, status=JobStatus.OPEN, skip=10, limit=5
        )
        mock_transaction_service.execute_in_transaction.assert_awaited_once()

class TestChangeJobStatusUseCase:
    """Test cases for ChangeJobStatusUseCase."""

    @pytest.fixture
    def use_case(self, mock_job_repository, mock_transaction_service):
        mock_job_repository.update.side_effect = lambda job, expected_status: job
        return ChangeJobStatusUseCase(mock_job_repository, mock_transaction_service)

    @pytest.mark.asyncio
    async def test_complete_assigned_job(self, use_case, mock_job_repository, make_job):
        job = make_job()
        job.assign_artist(uuid4(), uuid4())
        mock_job_repository.get_by_id.return_value = job

        result = await use_case.execute(job.id, job.client_id, JobStatus.COMPLETED)

        assert result.status == JobStatus.COMPLETED
        mock_job_repository.update.assert_awaited_once_with(
            job, expected_status=JobStatus.ASSIGNED
        )

    @pytest.mark.asyncio
    async def test_invalid_transition(self, use_case, mock_job_repository, make_job):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(InvalidStateError):
            await use_case.execute(job.id, job.client_id, JobStatus.IN_PROGRESS)

        mock_job_repository.update.assert_not_awaited()


class TestCheckApplicationEligibilityUseCase:
    """Test cases for CheckApplicationEligibilityUseCase."""

    @pytest.fixture
    def use_case(
        self, mock_job_repository, mock_proposal_repository, mock_transaction_service
    ):
        return CheckApplicationEligibilityUseCase(
            mock_job_repository, mock_proposal_repository, mock_transaction_service
        )

    @pytest.mark.asyncio
    async def test_can_apply(
        self, use_case, mock_job_repository, mock_proposal_repository, make_job
    ):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job
        mock_proposal_repository.find_by_job_and_artist.return_value = None

        result = await use_case.execute(job.id, uuid4())

        assert result.can_apply is True
        assert result.reasons == []

    @pytest.mark.asyncio
    async def test_already_applied(
        self,
        use_case,
        mock_job_repository,
        mock_proposal_repository,
        make_job,
        make_proposal,
    ):
        job = make_job()
        existing = make_proposal(job)
        mock_job_repository.get_by_id.return_value = job
        mock_proposal_repository.find_by_job_and_artist.return_value = existing

        result = await use_case.execute(job.id, existing.artist_id)

        assert result.can_apply is False
        assert result.reasons == ["You have already submitted a proposal for this job"]

    @pytest.mark.asyncio
    async def test_past_deadline(
        self,
        use_case,
        mock_job_repository,
        mock_proposal_repository,
        make_job,
        event_details,
    ):
        job = make_job(application_deadline=event_details.event_date - timedelta(days=60))
        mock_job_repository.get_by_id.return_value = job
        mock_proposal_repository.find_by_job_and_artist.return_value = None

        result = await use_case.execute(job.id, uuid4())

        assert result.can_apply is False
        assert "Application deadline has passed" in result.reasons
