"""Proposal-related API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from marketplace.api.auth import ArtistPrincipal, ClientPrincipal, CurrentPrincipal
from marketplace.api.dependencies import (
    AcceptProposalUseCaseDep,
    ProposalQueriesDep,
    RejectProposalUseCaseDep,
    SubmitProposalUseCaseDep,
    UpdateProposalUseCaseDep,
    WithdrawProposalUseCaseDep,
)
from marketplace.api.schemas.job import JobResponse
from marketplace.api.schemas.proposal import (
    AcceptProposalResponse,
    ProposalCreateRequest,
    ProposalListResponse,
    ProposalRejectRequest,
    ProposalResponse,
    ProposalStatsResponse,
    ProposalUpdateRequest,
)
from marketplace.application.use_cases.submit_proposal import SubmitProposalRequest
from marketplace.domain.value_objects.proposal_status import ProposalStatus

router = APIRouter(prefix="/proposals", tags=["proposals"])


@router.post("/", response_model=ProposalResponse, status_code=status.HTTP_201_CREATED)
async def submit_proposal(
    body: ProposalCreateRequest,
    principal: ArtistPrincipal,
    use_case: SubmitProposalUseCaseDep,
):
    """Submit a bid on an open job."""
    proposal = await use_case.execute(
        SubmitProposalRequest(
            job_id=body.job_id, artist_id=principal.id, bid=body.to_domain()
        )
    )
    return ProposalResponse.from_entity(proposal)


@router.get("/mine", response_model=ProposalListResponse)
async def list_my_proposals(
    principal: ArtistPrincipal,
    queries: ProposalQueriesDep,
    status_filter: Optional[ProposalStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """Page through the calling artist's proposals, newest first."""
    result = await queries.list_artist_proposals(
        principal.id, status=status_filter, page=page, limit=limit
    )
    return ProposalListResponse(
        items=[ProposalResponse.from_entity(p) for p in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@router.get("/stats", response_model=ProposalStatsResponse)
async def my_proposal_stats(principal: ArtistPrincipal, queries: ProposalQueriesDep):
    """Count the calling artist's proposals per status."""
    counts = await queries.artist_stats(principal.id)
    return ProposalStatsResponse(artist_id=principal.id, counts=counts)


@router.get("/job/{job_id}", response_model=List[ProposalResponse])
async def list_job_proposals(
    job_id: UUID,
    principal: ClientPrincipal,
    queries: ProposalQueriesDep,
    status_filter: Optional[ProposalStatus] = Query(None, alias="status"),
    limit: Optional[int] = Query(None, ge=1, le=100),
):
    """Proposals received by one of the caller's jobs."""
    proposals = await queries.list_job_proposals(
        job_id, principal.id, status=status_filter, limit=limit
    )
    return [ProposalResponse.from_entity(p) for p in proposals]


@router.get("/{proposal_id}", response_model=ProposalResponse)
async def get_proposal(
    proposal_id: UUID, principal: CurrentPrincipal, queries: ProposalQueriesDep
):
    """Visible to the proposing artist and the job owner."""
    proposal = await queries.get_proposal(proposal_id, principal.id)
    return ProposalResponse.from_entity(proposal)


@router.put("/{proposal_id}", response_model=ProposalResponse)
async def update_proposal(
    proposal_id: UUID,
    body: ProposalUpdateRequest,
    principal: ArtistPrincipal,
    use_case: UpdateProposalUseCaseDep,
):
    """Replace the bid of a pending proposal."""
    proposal = await use_case.execute(proposal_id, principal.id, body.to_domain())
    return ProposalResponse.from_entity(proposal)


@router.put("/{proposal_id}/accept", response_model=AcceptProposalResponse)
async def accept_proposal(
    proposal_id: UUID,
    principal: ClientPrincipal,
    use_case: AcceptProposalUseCaseDep,
):
    """Accept a proposal, assigning the job and rejecting the other pending bids."""
    result = await use_case.execute(proposal_id, principal.id)
    return AcceptProposalResponse(
        proposal=ProposalResponse.from_entity(result.proposal),
        job=JobResponse.from_entity(result.job),
        rejected_proposal_ids=result.event.rejected_proposal_ids,
    )


@router.put("/{proposal_id}/reject", response_model=ProposalResponse)
async def reject_proposal(
    proposal_id: UUID,
    principal: ClientPrincipal,
    use_case: RejectProposalUseCaseDep,
    body: Optional[ProposalRejectRequest] = None,
):
    """Reject a pending proposal with an optional message."""
    proposal = await use_case.execute(
        proposal_id, principal.id, message=body.message if body else None
    )
    return ProposalResponse.from_entity(proposal)


@router.put("/{proposal_id}/withdraw", response_model=ProposalResponse)
async def withdraw_proposal(
    proposal_id: UUID,
    principal: ArtistPrincipal,
    use_case: WithdrawProposalUseCaseDep,
):
    """Withdraw the caller's pending proposal."""
    proposal = await use_case.execute(proposal_id, principal.id)
    return ProposalResponse.from_entity(proposal)
