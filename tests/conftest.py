"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from marketplace.application.interfaces.repositories import (
    JobRepositoryInterface,
    NotificationRepositoryInterface,
    ProposalRepositoryInterface,
    ReviewRepositoryInterface,
    UserRepositoryInterface,
)
from marketplace.application.interfaces.services import RatingAggregatorInterface
from marketplace.config.settings import settings
from marketplace.domain.entities.job import Job
from marketplace.domain.entities.proposal import Proposal, ProposalBid
from marketplace.domain.entities.review import Review
from marketplace.domain.value_objects.budget import Budget
from marketplace.domain.value_objects.event_details import (
    EventDetails,
    EventType,
    JobCategory,
)
from marketplace.domain.value_objects.location import Location
from marketplace.domain.value_objects.pricing import EstimatedDuration, Pricing
from marketplace.domain.value_objects.principal import UserType
from marketplace.domain.value_objects.review_content import ReviewRating
from marketplace.infrastructure.database.models import Base

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

JOB_DESCRIPTION = (
    "Full bridal henna for both hands and feet, traditional Indian motifs "
    "with the couple's initials hidden in the design."
)
PROPOSAL_MESSAGE = (
    "I have ten years of bridal experience and can bring natural henna "
    "cones mixed fresh the day before your event."
)


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with a fresh schema per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_transaction_service():
    """Transaction service that simply runs the operation."""

    async def _run(operation):
        return await operation()

    service = MagicMock()
    service.execute_in_transaction = AsyncMock(side_effect=_run)
    return service


@pytest.fixture
def mock_job_repository():
    """Mock job repository."""
    return AsyncMock(spec=JobRepositoryInterface)


@pytest.fixture
def mock_proposal_repository():
    """Mock proposal repository."""
    return AsyncMock(spec=ProposalRepositoryInterface)


@pytest.fixture
def mock_review_repository():
    """Mock review repository."""
    return AsyncMock(spec=ReviewRepositoryInterface)


@pytest.fixture
def mock_user_repository():
    """Mock user repository."""
    return AsyncMock(spec=UserRepositoryInterface)


@pytest.fixture
def mock_notification_repository():
    """Mock notification repository."""
    return AsyncMock(spec=NotificationRepositoryInterface)


@pytest.fixture
def mock_rating_aggregator():
    """Mock rating aggregator."""
    return AsyncMock(spec=RatingAggregatorInterface)


@pytest.fixture
def event_details():
    """Event details one month ahead."""
    return EventDetails(
        event_type=EventType.WEDDING,
        event_date=datetime.now(timezone.utc) + timedelta(days=30),
        event_time="14:00",
        duration_hours=4,
        guest_count=10,
    )


@pytest.fixture
def make_job(event_details):
    """Factory for open jobs; keyword arguments override the defaults."""

    def _make(**overrides) -> Job:
        values = dict(
            client_id=uuid4(),
            title="Bridal henna for wedding",
            description=JOB_DESCRIPTION,
            category=JobCategory.BRIDAL,
            event_details=event_details,
            location=Location(address="1 High Street", city="London", postal_code="E1 6AN"),
            budget=Budget(min=Decimal("200"), max=Decimal("400")),
        )
        values.update(overrides)
        return Job(**values)

    return _make


@pytest.fixture
def make_bid():
    """Factory for valid proposal bids."""

    def _make(**overrides) -> ProposalBid:
        values = dict(
            message=PROPOSAL_MESSAGE,
            pricing=Pricing(total_price=Decimal("300")),
            estimated_duration=EstimatedDuration(value=4),
        )
        values.update(overrides)
        return ProposalBid(**values)

    return _make


@pytest.fixture
def make_proposal(make_bid):
    """Factory for pending proposals on a given job."""

    def _make(job: Job, artist_id=None, **overrides) -> Proposal:
        return Proposal(
            job_id=job.id,
            artist_id=artist_id or uuid4(),
            bid=overrides.pop("bid", None) or make_bid(),
            **overrides,
        )

    return _make


@pytest.fixture
def make_review():
    """Factory for submitted reviews."""

    def _make(**overrides) -> Review:
        values = dict(
            reviewer_id=uuid4(),
            reviewee_id=uuid4(),
            job_id=uuid4(),
            rating=ReviewRating(overall=5),
            comment="Beautiful work, very patient with the guests.",
        )
        values.update(overrides)
        return Review(**values)

    return _make


def make_token(user_id, user_type: UserType) -> str:
    """Mint a bearer token the way the auth service does."""
    claims = {"sub": str(user_id), "user_type": user_type.value}
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a user id and type."""

    def _headers(user_id, user_type: UserType) -> dict:
        return {"Authorization": f"Bearer {make_token(user_id, user_type)}"}

    return _headers


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, wired to the test database."""
    from marketplace.api.app import create_app
    from marketplace.config.database import get_db_session

    app = create_app()

    async def _override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    app.dependency_overrides.clear()
