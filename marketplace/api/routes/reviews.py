"""Review-related API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from marketplace.api.auth import (
    AdminPrincipal,
    ArtistPrincipal,
    ClientPrincipal,
    CurrentPrincipal,
)
from marketplace.api.dependencies import (
    CreateReviewUseCaseDep,
    DeleteReviewUseCaseDep,
    FlagReviewUseCaseDep,
    ListArtistReviewsUseCaseDep,
    ModerateReviewUseCaseDep,
    RespondToReviewUseCaseDep,
)
from marketplace.api.schemas.review import (
    ArtistReviewsResponse,
    FlagReviewRequest,
    ModerateReviewRequest,
    ReviewCreateRequest,
    ReviewReplyRequest,
    ReviewResponse,
    ReviewStatsSchema,
)
from marketplace.application.use_cases.create_review import CreateReviewRequest

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("/", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    body: ReviewCreateRequest,
    principal: ClientPrincipal,
    use_case: CreateReviewUseCaseDep,
):
    """Review the artist of one of the caller's completed jobs."""
    review = await use_case.execute(
        CreateReviewRequest(
            reviewer_id=principal.id,
            job_id=body.job_id,
            rating=body.rating.to_domain(),
            comment=body.comment,
            title=body.title,
            images=body.domain_images(),
            experience=body.experience.to_domain(),
            visibility=body.visibility,
        )
    )
    return ReviewResponse.from_entity(review)


@router.get("/artist/{artist_id}", response_model=ArtistReviewsResponse)
async def list_artist_reviews(
    artist_id: UUID,
    use_case: ListArtistReviewsUseCaseDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
):
    """Published reviews of an artist with aggregate statistics."""
    result = await use_case.execute(artist_id, page=page, limit=limit)
    return ArtistReviewsResponse(
        artist_id=artist_id,
        reviews=[ReviewResponse.from_entity(r) for r in result.reviews],
        stats=ReviewStatsSchema(**result.stats),
        page=result.page,
        limit=result.limit,
    )


@router.put("/{review_id}/moderate", response_model=ReviewResponse)
async def moderate_review(
    review_id: UUID,
    body: ModerateReviewRequest,
    principal: AdminPrincipal,
    use_case: ModerateReviewUseCaseDep,
):
    """Approve, reject or hide a review."""
    review = await use_case.execute(review_id, principal, body.action, body.notes)
    return ReviewResponse.from_entity(review)


@router.post("/{review_id}/flag", response_model=ReviewResponse)
async def flag_review(
    review_id: UUID,
    body: FlagReviewRequest,
    principal: CurrentPrincipal,
    use_case: FlagReviewUseCaseDep,
):
    """Report a review for moderation."""
    review = await use_case.execute(review_id, principal.id, body.type, body.reason)
    return ReviewResponse.from_entity(review)


@router.put("/{review_id}/response", response_model=ReviewResponse)
async def respond_to_review(
    review_id: UUID,
    body: ReviewReplyRequest,
    principal: ArtistPrincipal,
    use_case: RespondToReviewUseCaseDep,
):
    """Reply to a review as the reviewed artist."""
    review = await use_case.execute(
        review_id, principal.id, body.message, is_public=body.is_public
    )
    return ReviewResponse.from_entity(review)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: UUID, principal: CurrentPrincipal, use_case: DeleteReviewUseCaseDep
):
    """Remove a review; allowed for its author and for moderators."""
    await use_case.execute(review_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
