"""
Rating maintenance tasks.

Ratings are recomputed inline after review writes; these tasks repair any
artist whose recompute failed, and let operators rebuild a single rating.
"""

import asyncio
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.services.rating_aggregator import RatingAggregator
from marketplace.background.celery_app import celery_app
from marketplace.config.database import (
    close_database_connections,
    get_async_session_factory,
)
from marketplace.config.logging import get_logger
from marketplace.config.settings import settings
from marketplace.infrastructure.database.repositories.review_repository import (
    ReviewRepository,
)
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.database.repositories.user_repository import (
    UserRepository,
)

logger = get_logger(__name__)


def _build_aggregator(session: AsyncSession) -> RatingAggregator:
    return RatingAggregator(
        ReviewRepository(session), UserRepository(session), TransactionService(session)
    )


async def run_reconciliation(
    batch_size: Optional[int] = None,
    session_factory: Optional[Callable[[], AsyncSession]] = None,
) -> dict:
    """Run one reconciliation sweep over every artist."""
    factory = session_factory or get_async_session_factory()
    async with factory() as session:
        report = await _build_aggregator(session).reconcile(
            batch_size=batch_size or settings.RATING_RECONCILIATION_BATCH_SIZE
        )
    return report.to_dict()


async def run_recompute(
    artist_id: UUID,
    session_factory: Optional[Callable[[], AsyncSession]] = None,
) -> dict:
    """Rebuild one artist's rating."""
    factory = session_factory or get_async_session_factory()
    async with factory() as session:
        rating = await _build_aggregator(session).recompute(artist_id)
    return {
        "artist_id": str(artist_id),
        "average": str(rating.average),
        "count": rating.count,
    }


async def _in_worker(coro):
    # Each task runs in a fresh event loop; pooled connections must not outlive it.
    try:
        return await coro
    finally:
        await close_database_connections()


@celery_app.task(bind=True, max_retries=2, name="reconcile_artist_ratings_task")
def reconcile_artist_ratings_task(self, batch_size: Optional[int] = None):
    """Periodic sweep correcting cached ratings that drifted."""
    logger.info(
        "Starting rating reconciliation task",
        attempt=self.request.retries + 1,
        max_retries=self.max_retries,
    )
    try:
        return asyncio.run(_in_worker(run_reconciliation(batch_size)))
    except Exception as e:
        logger.error("Rating reconciliation task failed", error=str(e), exc_info=True)
        raise self.retry(exc=e, countdown=60)


@celery_app.task(bind=True, max_retries=3, name="recompute_artist_rating_task")
def recompute_artist_rating_task(self, artist_id: str):
    """Rebuild a single artist's rating on demand."""
    try:
        return asyncio.run(_in_worker(run_recompute(UUID(artist_id))))
    except Exception as e:
        logger.error(
            "Artist rating recompute task failed",
            artist_id=artist_id,
            error=str(e),
        )
        raise self.retry(exc=e, countdown=2 ** self.request.retries * 10)
