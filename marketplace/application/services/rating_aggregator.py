"""
Artist rating aggregator.

The cached ``rating_average``/``rating_count`` columns of an artist are
always rebuilt from the published reviews, never patched incrementally.
This service is the only writer of those columns.
"""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from marketplace.application.interfaces.repositories import (
    ReviewRepositoryInterface,
    UserRepositoryInterface,
)
from marketplace.application.interfaces.services import RatingAggregatorInterface
from marketplace.config.logging import get_logger
from marketplace.domain.value_objects.artist_rating import ArtistRating
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.monitoring.metrics import (
    record_rating_drift,
    record_rating_recompute,
)

logger = get_logger(__name__)


@dataclass
class ReconciliationReport:
    """Outcome of a reconciliation sweep."""

    scanned: int = 0
    corrected: int = 0
    failed: int = 0
    corrected_artist_ids: List[UUID] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "scanned": self.scanned,
            "corrected": self.corrected,
            "failed": self.failed,
            "corrected_artist_ids": [str(i) for i in self.corrected_artist_ids],
        }


class RatingAggregator(RatingAggregatorInterface):
    """Recomputes artist ratings from published reviews."""

    def __init__(
        self,
        review_repo: ReviewRepositoryInterface,
        user_repo: UserRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.review_repo = review_repo
        self.user_repo = user_repo
        self.transaction_service = transaction_service
        self.logger = logger

    async def _compute(self, artist_id: UUID) -> ArtistRating:
        total, count = await self.review_repo.published_rating_totals(artist_id)
        return ArtistRating.from_totals(total, count)

    async def recompute(self, artist_id: UUID) -> ArtistRating:
        """Recompute and persist the rating in its own transaction."""

        async def _recompute() -> ArtistRating:
            rating = await self._compute(artist_id)
            await self.user_repo.save_rating(artist_id, rating)
            return rating

        rating = await self.transaction_service.execute_in_transaction(_recompute)
        record_rating_recompute("success")

        self.logger.info(
            "Artist rating recomputed",
            artist_id=str(artist_id),
            average=str(rating.average),
            count=rating.count,
        )
        return rating

    async def recompute_quietly(self, artist_id: UUID) -> None:
        """Run recompute as a side effect; the triggering write already committed."""
        try:
            await self.recompute(artist_id)
        except Exception as e:
            record_rating_recompute("failure")
            self.logger.error(
                "Artist rating recompute failed; reconciliation will repair it",
                artist_id=str(artist_id),
                error=str(e),
                exc_info=True,
            )

    async def reconcile(self, batch_size: int = 200) -> ReconciliationReport:
        """Compare cached and recomputed ratings for every artist.

        Divergent ratings are rewritten; failures are counted, not raised.
        """
        report = ReconciliationReport()
        skip = 0

        while True:
            artist_ids = await self.user_repo.list_artist_ids(skip=skip, limit=batch_size)
            if not artist_ids:
                break

            for artist_id in artist_ids:
                report.scanned += 1
                try:
                    if await self._reconcile_one(artist_id):
                        report.corrected += 1
                        report.corrected_artist_ids.append(artist_id)
                except Exception as e:
                    report.failed += 1
                    self.logger.error(
                        "Rating reconciliation failed for artist",
                        artist_id=str(artist_id),
                        error=str(e),
                    )

            if len(artist_ids) < batch_size:
                break
            skip += batch_size

        record_rating_drift(report.corrected)
        self.logger.info(
            "Rating reconciliation finished",
            scanned=report.scanned,
            corrected=report.corrected,
            failed=report.failed,
        )
        return report

    async def _reconcile_one(self, artist_id: UUID) -> bool:
        async def _check_and_fix() -> bool:
            artist = await self.user_repo.get_by_id(artist_id)
            if artist is None:
                return False
            expected = await self._compute(artist_id)
            if artist.rating == expected:
                return False
            await self.user_repo.save_rating(artist_id, expected)
            self.logger.warning(
                "Artist rating drift corrected",
                artist_id=str(artist_id),
                cached_average=str(artist.rating.average),
                cached_count=artist.rating.count,
                average=str(expected.average),
                count=expected.count,
            )
            return True

        return await self.transaction_service.execute_in_transaction(_check_and_fix)
