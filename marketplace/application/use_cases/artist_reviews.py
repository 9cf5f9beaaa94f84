"""Artist review listing use case."""

from dataclasses import dataclass
from typing import Dict, List
from uuid import UUID

from marketplace.application.interfaces.repositories import ReviewRepositoryInterface
from marketplace.domain.entities.review import Review


@dataclass
class ArtistReviewsResult:
    """Published reviews of an artist with aggregate statistics."""

    reviews: List[Review]
    stats: Dict
    page: int
    limit: int


class ListArtistReviewsUseCase:
    """Public listing of an artist's published, non-private reviews."""

    def __init__(self, review_repo: ReviewRepositoryInterface):
        self.review_repo = review_repo

    async def execute(
        self, artist_id: UUID, page: int = 1, limit: int = 10
    ) -> ArtistReviewsResult:
        reviews = await self.review_repo.list_published_for_artist(
            artist_id, skip=(page - 1) * limit, limit=limit
        )
        stats = await self.review_repo.artist_stats(artist_id)
        return ArtistReviewsResult(reviews=reviews, stats=stats, page=page, limit=limit)
