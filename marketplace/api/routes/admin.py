"""
Admin routes for rating maintenance.
"""

from uuid import UUID

from fastapi import APIRouter, Query

from marketplace.api.auth import AdminPrincipal
from marketplace.api.dependencies import (
    RatingAggregatorDep,
    TransactionServiceDep,
    UserRepositoryDep,
)
from marketplace.api.schemas.review import ArtistRatingResponse, ReconciliationResponse
from marketplace.config.logging import get_logger
from marketplace.config.settings import settings
from marketplace.domain.exceptions.access_error import NotFoundError

logger = get_logger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/ratings/reconcile", response_model=ReconciliationResponse)
async def reconcile_ratings(
    principal: AdminPrincipal,
    aggregator: RatingAggregatorDep,
    batch_size: int = Query(None, ge=1, le=1000),
):
    """Run a reconciliation sweep now instead of waiting for the schedule."""
    report = await aggregator.reconcile(
        batch_size=batch_size or settings.RATING_RECONCILIATION_BATCH_SIZE
    )
    logger.info(
        "Rating reconciliation triggered via admin API",
        admin_id=str(principal.id),
        corrected=report.corrected,
    )
    return ReconciliationResponse(**report.to_dict())


@router.get("/artists/{artist_id}/rating", response_model=ArtistRatingResponse)
async def get_artist_rating(
    artist_id: UUID,
    principal: AdminPrincipal,
    user_repo: UserRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Cached rating of an artist as stored on the user row."""
    user = await transaction_service.execute_in_transaction(
        lambda: user_repo.get_by_id(artist_id)
    )
    if user is None or not user.is_artist:
        raise NotFoundError("Artist", artist_id)

    return ArtistRatingResponse(
        artist_id=user.id, average=user.rating.average, count=user.rating.count
    )


@router.post("/artists/{artist_id}/rating/recompute", response_model=ArtistRatingResponse)
async def recompute_artist_rating(
    artist_id: UUID, principal: AdminPrincipal, aggregator: RatingAggregatorDep
):
    """Rebuild one artist's rating from their published reviews."""
    rating = await aggregator.recompute(artist_id)
    return ArtistRatingResponse(
        artist_id=artist_id, average=rating.average, count=rating.count
    )
