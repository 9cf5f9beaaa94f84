"""
Integration tests for the rating maintenance tasks.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio

from marketplace.background.tasks.rating_reconciliation import (
    run_reconciliation,
    run_recompute,
)
from marketplace.domain.entities.review import Review
from marketplace.domain.value_objects.principal import UserType
from marketplace.domain.value_objects.review_content import ReviewRating
from marketplace.domain.value_objects.review_status import ReviewStatus
from marketplace.infrastructure.database.models import UserModel
from marketplace.infrastructure.database.repositories import (
    ReviewRepository,
    UserRepository,
)


@pytest_asyncio.fixture
async def drifted_artist(session_factory):
    """An artist whose cached rating disagrees with their published reviews."""
    artist = UserModel(
        id=uuid4(),
        user_type=UserType.ARTIST.value,
        rating_average=Decimal("1.0"),
        rating_count=7,
    )
    async with session_factory() as session:
        session.add(artist)
        reviews = ReviewRepository(session)
        for overall, status in (
            (5, ReviewStatus.PUBLISHED),
            (4, ReviewStatus.PUBLISHED),
            (1, ReviewStatus.HIDDEN),
        ):
            await reviews.create(
                Review(
                    reviewer_id=uuid4(),
                    reviewee_id=artist.id,
                    job_id=uuid4(),
                    rating=ReviewRating(overall=overall),
                    comment="Lovely designs and very friendly.",
                    status=status,
                )
            )
        await session.commit()
    return artist.id


async def _cached_rating(session_factory, artist_id):
    async with session_factory() as session:
        user = await UserRepository(session).get_by_id(artist_id)
    return user.rating


class TestRatingReconciliationTask:
    """Test cases for the reconciliation sweep."""

    @pytest.mark.asyncio
    async def test_sweep_repairs_drifted_rating(self, session_factory, drifted_artist):
        report = await run_reconciliation(batch_size=10, session_factory=session_factory)

        assert report["scanned"] == 1
        assert report["corrected"] == 1
        assert report["corrected_artist_ids"] == [str(drifted_artist)]

        rating = await _cached_rating(session_factory, drifted_artist)
        assert rating.average == Decimal("4.5")
        assert rating.count == 2

    @pytest.mark.asyncio
    async def test_second_sweep_finds_nothing(self, session_factory, drifted_artist):
        await run_reconciliation(batch_size=10, session_factory=session_factory)

        report = await run_reconciliation(batch_size=10, session_factory=session_factory)

        assert report["scanned"] == 1
        assert report["corrected"] == 0

    @pytest.mark.asyncio
    async def test_recompute_single_artist(self, session_factory, drifted_artist):
        result = await run_recompute(drifted_artist, session_factory=session_factory)

        assert result == {
            "artist_id": str(drifted_artist),
            "average": "4.5",
            "count": 2,
        }
        rating = await _cached_rating(session_factory, drifted_artist)
        assert rating.count == 2
