"""
Integration tests for the SQLAlchemy repositories against SQLite.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from marketplace.domain.entities.notification import Notification, NotificationType
from marketplace.domain.entities.review import Review
from marketplace.domain.exceptions.access_error import NotFoundError
from marketplace.domain.exceptions.lifecycle_error import (
    ConflictError,
    InvalidStateError,
)
from marketplace.domain.value_objects.artist_rating import ArtistRating
from marketplace.domain.value_objects.event_details import EventDetails
from marketplace.domain.value_objects.job_status import JobStatus
from marketplace.domain.value_objects.principal import UserType
from marketplace.domain.value_objects.proposal_status import ProposalStatus
from marketplace.domain.value_objects.review_content import (
    ReviewExperience,
    ReviewRating,
)
from marketplace.domain.value_objects.review_status import (
    FlagType,
    ReviewStatus,
    ReviewVisibility,
)
from marketplace.infrastructure.database.models import (
    JobModel,
    JobViewModel,
    UserModel,
)
from marketplace.infrastructure.database.repositories import (
    JobRepository,
    NotificationRepository,
    ProposalRepository,
    ReviewRepository,
    UserRepository,
)


@pytest.fixture
def job_repo(db_session):
    return JobRepository(db_session)


@pytest.fixture
def proposal_repo(db_session):
    return ProposalRepository(db_session)


@pytest.fixture
def review_repo(db_session):
    return ReviewRepository(db_session)


@pytest.fixture
def user_repo(db_session):
    return UserRepository(db_session)


@pytest.fixture
def notification_repo(db_session):
    return NotificationRepository(db_session)


class TestJobRepository:
    """Test cases for JobRepository."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, job_repo, make_job):
        job = make_job()
        await job_repo.create(job)

        loaded = await job_repo.get_by_id(job.id)

        assert loaded.id == job.id
        assert loaded.status == JobStatus.OPEN
        assert loaded.budget.min == Decimal("200")
        assert loaded.event_details.event_date == job.event_details.event_date
        assert loaded.event_details.event_date.tzinfo is not None
        assert loaded.application_deadline == job.application_deadline
        assert loaded.received_proposal_ids == []

    @pytest.mark.asyncio
    async def test_get_missing(self, job_repo):
        assert await job_repo.get_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_expiry_is_persisted_on_read(
        self, job_repo, db_session, make_job, event_details
    ):
        past = EventDetails(
            event_type=event_details.event_type,
            event_date=datetime.now(timezone.utc) - timedelta(hours=2),
            event_time="10:00",
            duration_hours=2,
            guest_count=4,
        )
        job = make_job(event_details=past)
        await job_repo.create(job)

        loaded = await job_repo.get_by_id(job.id)

        assert loaded.status == JobStatus.EXPIRED
        stored = await db_session.scalar(
            select(JobModel.status).where(JobModel.id == job.id)
        )
        assert stored == JobStatus.EXPIRED.value

    @pytest.mark.asyncio
    async def test_claim_application_slot_is_bounded(self, job_repo, make_job):
        job = make_job(max_applications=2)
        await job_repo.create(job)

        assert await job_repo.claim_application_slot(job.id) is True
        assert await job_repo.claim_application_slot(job.id) is True
        assert await job_repo.claim_application_slot(job.id) is False

    @pytest.mark.asyncio
    async def test_claim_refused_when_not_accepting(self, job_repo, make_job):
        job = make_job(accepting_applications=False)
        await job_repo.create(job)

        assert await job_repo.claim_application_slot(job.id) is False

    @pytest.mark.asyncio
    async def test_record_view_remembers_artist_once(
        self, job_repo, db_session, make_job
    ):
        job = make_job()
        await job_repo.create(job)
        artist_id = uuid4()

        assert await job_repo.record_view(job.id, artist_id) is True
        assert await job_repo.record_view(job.id, artist_id) is True
        assert await job_repo.record_view(job.id) is True

        loaded = await job_repo.get_by_id(job.id)
        viewers = await db_session.scalar(
            select(func.count()).select_from(JobViewModel).where(
                JobViewModel.job_id == job.id
            )
        )
        assert loaded.views == 3
        assert viewers == 1

    @pytest.mark.asyncio
    async def test_record_view_missing_job(self, job_repo):
        assert await job_repo.record_view(uuid4(), uuid4()) is False

    @pytest.mark.asyncio
    async def test_assign_if_biddable_only_once(self, job_repo, make_job):
        job = make_job()
        await job_repo.create(job)
        winner_artist, winner_proposal = uuid4(), uuid4()

        assert await job_repo.assign_if_biddable(job.id, winner_artist, winner_proposal)
        assert not await job_repo.assign_if_biddable(job.id, uuid4(), uuid4())

        loaded = await job_repo.get_by_id(job.id)
        assert loaded.status == JobStatus.ASSIGNED
        assert loaded.assigned_artist_id == winner_artist
        assert loaded.selected_proposal_id == winner_proposal
        assert loaded.accepting_applications is False

    @pytest.mark.asyncio
    async def test_assign_refused_after_event(self, job_repo, make_job, event_details):
        past = EventDetails(
            event_type=event_details.event_type,
            event_date=datetime.now(timezone.utc) - timedelta(minutes=5),
            event_time="10:00",
            duration_hours=2,
            guest_count=4,
        )
        job = make_job(event_details=past)
        await job_repo.create(job)

        assert not await job_repo.assign_if_biddable(job.id, uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_update_with_stale_status(self, job_repo, make_job):
        job = make_job()
        await job_repo.create(job)
        await job_repo.assign_if_biddable(job.id, uuid4(), uuid4())

        job.title = "Changed after assignment"
        with pytest.raises(InvalidStateError):
            await job_repo.update(job, expected_status=JobStatus.OPEN)

    @pytest.mark.asyncio
    async def test_update_missing_job(self, job_repo, make_job):
        with pytest.raises(NotFoundError):
            await job_repo.update(make_job(), expected_status=JobStatus.OPEN)

    @pytest.mark.asyncio
    async def test_update_and_delete(self, job_repo, make_job):
        job = make_job()
        await job_repo.create(job)

        job.update_details(title="Mehndi party henna")
        await job_repo.update(job, expected_status=JobStatus.OPEN)
        assert (await job_repo.get_by_id(job.id)).title == "Mehndi party henna"

        await job_repo.record_view(job.id, uuid4())
        assert await job_repo.delete(job.id) is True
        assert await job_repo.get_by_id(job.id) is None

    @pytest.mark.asyncio
    async def test_client_listing_expires_stale_jobs(
        self, job_repo, proposal_repo, make_job, make_proposal, event_details
    ):
        client_id = uuid4()
        now = datetime.now(timezone.utc)
        past = EventDetails(
            event_type=event_details.event_type,
            event_date=now - timedelta(days=1),
            event_time="10:00",
            duration_hours=2,
            guest_count=4,
        )
        oldest = make_job(client_id=client_id, created_at=now - timedelta(days=3))
        stale = make_job(
            client_id=client_id, event_details=past, created_at=now - timedelta(days=2)
        )
        newest = make_job(client_id=client_id, created_at=now - timedelta(days=1))
        for job in (oldest, stale, newest, make_job()):
            await job_repo.create(job)
        proposal = make_proposal(oldest)
        await proposal_repo.create(proposal)

        jobs, total = await job_repo.list_by_client(client_id)

        assert total == 3
        assert [j.id for j in jobs] == [newest.id, stale.id, oldest.id]
        assert jobs[1].status == JobStatus.EXPIRED
        assert jobs[2].received_proposal_ids == [proposal.id]

        open_jobs, open_total = await job_repo.list_by_client(
            client_id, status=JobStatus.OPEN, skip=1, limit=1
        )
        assert open_total == 2
        assert [j.id for j in open_jobs] == [oldest.id]


class TestProposalRepository:
    """Test cases for ProposalRepository."""

    @pytest_asyncio.fixture
    async def job(self, job_repo, make_job):
        job = make_job()
        await job_repo.create(job)
        return job

    @pytest.mark.asyncio
    async def test_create_and_find(self, proposal_repo, job_repo, job, make_proposal):
        proposal = make_proposal(job)
        await proposal_repo.create(proposal)

        found = await proposal_repo.find_by_job_and_artist(job.id, proposal.artist_id)
        loaded_job = await job_repo.get_by_id(job.id)

        assert found.id == proposal.id
        assert found.bid.pricing.total_price == Decimal("300")
        assert loaded_job.received_proposal_ids == [proposal.id]

    @pytest.mark.asyncio
    async def test_duplicate_artist(self, proposal_repo, db_session, job, make_proposal):
        first = make_proposal(job)
        await proposal_repo.create(first)

        with pytest.raises(ConflictError):
            await proposal_repo.create(make_proposal(job, artist_id=first.artist_id))

        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_accept_and_reject_siblings(self, proposal_repo, job, make_proposal):
        chosen, pending, withdrawn = (make_proposal(job) for _ in range(3))
        for proposal in (chosen, pending, withdrawn):
            await proposal_repo.create(proposal)
        withdrawn.withdraw()
        await proposal_repo.update(withdrawn, expected_status=ProposalStatus.PENDING)

        now = datetime.now(timezone.utc)
        assert await proposal_repo.accept_if_pending(chosen.id, job.client_id, now)
        assert not await proposal_repo.accept_if_pending(chosen.id, job.client_id, now)

        rejected = await proposal_repo.reject_pending_siblings(
            job_id=job.id,
            accepted_proposal_id=chosen.id,
            client_id=job.client_id,
            message="Another proposal was selected",
            responded_at=now,
        )

        assert rejected == [pending.id]
        loaded = {p.id: p for p in await proposal_repo.list_by_job(job.id)}
        assert loaded[chosen.id].status == ProposalStatus.ACCEPTED
        assert loaded[pending.id].status == ProposalStatus.REJECTED
        assert loaded[pending.id].client_response.message == (
            "Another proposal was selected"
        )
        assert loaded[withdrawn.id].status == ProposalStatus.WITHDRAWN

    @pytest.mark.asyncio
    async def test_second_accepted_proposal_violates_index(
        self, proposal_repo, db_session, job, make_proposal
    ):
        first, second = make_proposal(job), make_proposal(job)
        await proposal_repo.create(first)
        await proposal_repo.create(second)
        now = datetime.now(timezone.utc)
        await proposal_repo.accept_if_pending(first.id, job.client_id, now)

        with pytest.raises(IntegrityError):
            await proposal_repo.accept_if_pending(second.id, job.client_id, now)

        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_stale_update(self, proposal_repo, job, make_proposal):
        proposal = make_proposal(job)
        await proposal_repo.create(proposal)
        await proposal_repo.accept_if_pending(
            proposal.id, job.client_id, datetime.now(timezone.utc)
        )

        proposal.withdraw()
        with pytest.raises(InvalidStateError):
            await proposal_repo.update(proposal, expected_status=ProposalStatus.PENDING)

    @pytest.mark.asyncio
    async def test_artist_listing_and_counts(
        self, proposal_repo, job_repo, make_job, make_proposal
    ):
        artist_id = uuid4()
        for _ in range(3):
            job = make_job()
            await job_repo.create(job)
            await proposal_repo.create(make_proposal(job, artist_id=artist_id))

        items, total = await proposal_repo.list_by_artist(artist_id, skip=0, limit=2)
        withdrawn = items[0]
        withdrawn.withdraw()
        await proposal_repo.update(withdrawn, expected_status=ProposalStatus.PENDING)

        assert total == 3
        assert len(items) == 2
        assert await proposal_repo.count_by_status(artist_id) == {
            "pending": 2,
            "withdrawn": 1,
        }
        pending, pending_total = await proposal_repo.list_by_artist(
            artist_id, status=ProposalStatus.PENDING
        )
        assert pending_total == 2
        assert all(p.status == ProposalStatus.PENDING for p in pending)


class TestReviewRepository:
    """Test cases for ReviewRepository."""

    def _review(self, artist_id, overall, status=ReviewStatus.PUBLISHED, **extra):
        return Review(
            reviewer_id=uuid4(),
            reviewee_id=artist_id,
            job_id=uuid4(),
            rating=ReviewRating(overall=overall),
            comment="Lovely work on the day, thank you.",
            status=status,
            **extra,
        )

    @pytest.mark.asyncio
    async def test_create_and_get(self, review_repo):
        review = self._review(uuid4(), 5)
        await review_repo.create(review)

        loaded = await review_repo.get_by_id(review.id)

        assert loaded.rating.overall == 5
        assert loaded.status == ReviewStatus.PUBLISHED
        assert await review_repo.exists_for_reviewer_and_job(
            review.reviewer_id, review.job_id
        )

    @pytest.mark.asyncio
    async def test_one_review_per_reviewer_and_job(self, review_repo, db_session):
        review = self._review(uuid4(), 4)
        await review_repo.create(review)
        duplicate = Review(
            reviewer_id=review.reviewer_id,
            reviewee_id=review.reviewee_id,
            job_id=review.job_id,
            rating=ReviewRating(overall=1),
            comment="Changed my mind about it.",
        )

        with pytest.raises(ConflictError):
            await review_repo.create(duplicate)

        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_totals_and_stats_count_published_only(self, review_repo):
        artist_id = uuid4()
        reviews = [
            self._review(artist_id, 5, experience=ReviewExperience(would_recommend=True)),
            self._review(artist_id, 4, experience=ReviewExperience(would_recommend=True)),
            self._review(artist_id, 4, experience=ReviewExperience(would_recommend=False)),
            self._review(artist_id, 4),
            self._review(artist_id, 1, status=ReviewStatus.SUBMITTED),
            self._review(artist_id, 1, status=ReviewStatus.HIDDEN),
        ]
        for review in reviews:
            await review_repo.create(review)

        assert await review_repo.published_rating_totals(artist_id) == (17, 4)

        stats = await review_repo.artist_stats(artist_id)
        assert stats["total_reviews"] == 4
        assert stats["average_rating"] == Decimal("4.3")
        assert stats["rating_distribution"] == {1: 0, 2: 0, 3: 0, 4: 3, 5: 1}
        assert stats["recommendation_rate"] == Decimal("67")

    @pytest.mark.asyncio
    async def test_stats_without_reviews(self, review_repo):
        stats = await review_repo.artist_stats(uuid4())

        assert stats["total_reviews"] == 0
        assert stats["average_rating"] == Decimal("0.0")
        assert stats["recommendation_rate"] is None

    @pytest.mark.asyncio
    async def test_public_listing_hides_private_and_unpublished(self, review_repo):
        artist_id = uuid4()
        public = self._review(artist_id, 5)
        private = self._review(artist_id, 3, visibility=ReviewVisibility.PRIVATE)
        flagged = self._review(artist_id, 2, status=ReviewStatus.FLAGGED)
        for review in (public, private, flagged):
            await review_repo.create(review)

        listed = await review_repo.list_published_for_artist(artist_id)

        assert [r.id for r in listed] == [public.id]

    @pytest.mark.asyncio
    async def test_update_flags_and_response(self, review_repo):
        review = self._review(uuid4(), 5)
        await review_repo.create(review)
        reporter = uuid4()

        review.flag(reporter, FlagType.SPAM, "Posted twice")
        review.respond(review.reviewee_id, "Thanks for the kind words")
        await review_repo.update(review)

        loaded = await review_repo.get_by_id(review.id)
        assert loaded.status == ReviewStatus.FLAGGED
        assert loaded.moderation.flags[0].reported_by == reporter
        assert loaded.moderation.flags[0].type == FlagType.SPAM
        assert loaded.artist_response.message == "Thanks for the kind words"

    @pytest.mark.asyncio
    async def test_update_missing(self, review_repo):
        with pytest.raises(NotFoundError):
            await review_repo.update(self._review(uuid4(), 3))

    @pytest.mark.asyncio
    async def test_delete(self, review_repo):
        review = self._review(uuid4(), 3)
        await review_repo.create(review)

        assert await review_repo.delete(review.id) is True
        assert await review_repo.get_by_id(review.id) is None
        assert await review_repo.delete(review.id) is False


class TestUserRepository:
    """Test cases for UserRepository."""

    @pytest_asyncio.fixture
    async def users(self, db_session):
        artist = UserModel(id=uuid4(), user_type=UserType.ARTIST.value)
        quiet_artist = UserModel(
            id=uuid4(), user_type=UserType.ARTIST.value, notify_new_jobs=False
        )
        inactive_artist = UserModel(
            id=uuid4(), user_type=UserType.ARTIST.value, is_active=False
        )
        client = UserModel(id=uuid4(), user_type=UserType.CLIENT.value)
        db_session.add_all([artist, quiet_artist, inactive_artist, client])
        await db_session.flush()
        return artist, quiet_artist, inactive_artist, client

    @pytest.mark.asyncio
    async def test_new_job_subscribers(self, user_repo, users):
        artist = users[0]

        subscribers = await user_repo.find_new_job_subscribers()

        assert [u.id for u in subscribers] == [artist.id]

    @pytest.mark.asyncio
    async def test_list_artist_ids_pages(self, user_repo, users):
        artist_ids = sorted(u.id for u in users[:3])

        first = await user_repo.list_artist_ids(skip=0, limit=2)
        rest = await user_repo.list_artist_ids(skip=2, limit=2)

        assert sorted(first + rest) == artist_ids
        assert len(first) == 2

    @pytest.mark.asyncio
    async def test_save_rating(self, user_repo, users):
        artist = users[0]
        rating = ArtistRating(average=Decimal("4.5"), count=2)

        assert await user_repo.save_rating(artist.id, rating) is True
        assert (await user_repo.get_by_id(artist.id)).rating == rating
        assert await user_repo.save_rating(uuid4(), rating) is False


class TestNotificationRepository:
    """Test cases for NotificationRepository."""

    def _notification(self, recipient_id, **overrides):
        values = dict(
            recipient_id=recipient_id,
            type=NotificationType.NEW_JOB_POSTED,
            title="New job: Bridal henna",
            message="A new bridal job was posted in London",
        )
        values.update(overrides)
        return Notification(**values)

    @pytest_asyncio.fixture
    async def inbox(self, notification_repo):
        recipient_id = uuid4()
        now = datetime.now(timezone.utc)
        older = self._notification(recipient_id, created_at=now - timedelta(hours=2))
        newer = self._notification(recipient_id, created_at=now - timedelta(hours=1))
        expired = self._notification(
            recipient_id,
            created_at=now - timedelta(days=40),
            expires_at=now - timedelta(days=10),
        )
        someone_else = self._notification(uuid4())
        await notification_repo.create_many([older, newer, expired, someone_else])
        return recipient_id, older, newer, someone_else

    @pytest.mark.asyncio
    async def test_listing_skips_expired_and_other_recipients(
        self, notification_repo, inbox
    ):
        recipient_id, older, newer, _ = inbox

        items, total = await notification_repo.list_for_recipient(recipient_id)

        assert total == 2
        assert [n.id for n in items] == [newer.id, older.id]
        assert await notification_repo.count_unread(recipient_id) == 2

    @pytest.mark.asyncio
    async def test_mark_read_keeps_first_timestamp(self, notification_repo, inbox):
        recipient_id, older, _, _ = inbox
        first = datetime.now(timezone.utc) - timedelta(minutes=5)

        marked = await notification_repo.mark_read(older.id, recipient_id, first)
        again = await notification_repo.mark_read(
            older.id, recipient_id, datetime.now(timezone.utc)
        )

        assert marked.is_read is True
        assert again.read_at == marked.read_at
        unread, unread_total = await notification_repo.list_for_recipient(
            recipient_id, unread_only=True
        )
        assert unread_total == 1
        assert older.id not in [n.id for n in unread]

    @pytest.mark.asyncio
    async def test_recipient_scoping(self, notification_repo, inbox):
        recipient_id, _, _, someone_else = inbox
        now = datetime.now(timezone.utc)

        assert await notification_repo.mark_read(someone_else.id, recipient_id, now) is None
        assert (
            await notification_repo.delete_for_recipient(someone_else.id, recipient_id)
            is False
        )
        assert await notification_repo.count_unread(someone_else.recipient_id) == 1

    @pytest.mark.asyncio
    async def test_mark_all_read_then_clear(self, notification_repo, inbox):
        recipient_id, older, _, _ = inbox

        # The expired notification is unread too
        assert await notification_repo.mark_all_read(
            recipient_id, datetime.now(timezone.utc)
        ) == 3
        assert await notification_repo.count_unread(recipient_id) == 0
        assert await notification_repo.delete_for_recipient(older.id, recipient_id) is True
        assert await notification_repo.delete_read(recipient_id) == 2

        _, total = await notification_repo.list_for_recipient(recipient_id)
        assert total == 0
