"""Job-related API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from marketplace.api.auth import ArtistPrincipal, ClientPrincipal, OptionalPrincipal
from marketplace.api.dependencies import (
    ChangeJobStatusUseCaseDep,
    CreateJobUseCaseDep,
    DeleteJobUseCaseDep,
    EligibilityUseCaseDep,
    GetJobUseCaseDep,
    ListClientJobsUseCaseDep,
    UpdateJobUseCaseDep,
)
from marketplace.api.schemas.job import (
    EligibilityResponse,
    JobCreatedResponse,
    JobCreateRequest,
    JobListResponse,
    JobResponse,
    JobStatusUpdateRequest,
    JobUpdateRequest,
)
from marketplace.application.use_cases.create_job import CreateJobRequest
from marketplace.application.use_cases.update_job import UpdateJobRequest
from marketplace.domain.value_objects.job_status import JobStatus

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/", response_model=JobCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreateRequest,
    principal: ClientPrincipal,
    use_case: CreateJobUseCaseDep,
):
    """Post a new job and notify subscribed artists."""
    result = await use_case.execute(
        CreateJobRequest(
            client_id=principal.id,
            title=job_data.title,
            description=job_data.description,
            category=job_data.category,
            event_details=job_data.event_details.to_domain(),
            location=job_data.location.to_domain(),
            budget=job_data.budget.to_domain(),
            priority=job_data.priority,
            accepting_applications=job_data.accepting_applications,
            max_applications=job_data.max_applications,
        )
    )

    response = JobResponse.from_entity(result.job).model_dump()
    return JobCreatedResponse(**response, notified_artists=len(result.notifications))


@router.get("/mine", response_model=JobListResponse)
async def list_my_jobs(
    principal: ClientPrincipal,
    use_case: ListClientJobsUseCaseDep,
    status_filter: Optional[JobStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """Page through the calling client's jobs, newest first."""
    result = await use_case.execute(
        principal.id, status=status_filter, page=page, limit=limit
    )
    return JobListResponse(
        items=[JobResponse.from_entity(j) for j in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: UUID, principal: OptionalPrincipal, use_case: GetJobUseCaseDep):
    """Get a job and count the view."""
    job = await use_case.execute(job_id, viewer=principal)
    return JobResponse.from_entity(job)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: UUID,
    job_data: JobUpdateRequest,
    principal: ClientPrincipal,
    use_case: UpdateJobUseCaseDep,
):
    """Edit a job that is still open for bidding."""
    job = await use_case.execute(
        UpdateJobRequest(
            job_id=job_id,
            client_id=principal.id,
            title=job_data.title,
            description=job_data.description,
            category=job_data.category,
            event_details=(
                job_data.event_details.to_domain() if job_data.event_details else None
            ),
            location=job_data.location.to_domain() if job_data.location else None,
            budget=job_data.budget.to_domain() if job_data.budget else None,
            priority=job_data.priority,
            accepting_applications=job_data.accepting_applications,
            max_applications=job_data.max_applications,
        )
    )
    return JobResponse.from_entity(job)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(job_id: UUID, principal: ClientPrincipal, use_case: DeleteJobUseCaseDep):
    """Delete a job that never received proposals."""
    await use_case.execute(job_id, principal.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{job_id}/status", response_model=JobResponse)
async def change_job_status(
    job_id: UUID,
    body: JobStatusUpdateRequest,
    principal: ClientPrincipal,
    use_case: ChangeJobStatusUseCaseDep,
):
    """Apply an owner-driven status change."""
    job = await use_case.execute(job_id, principal.id, body.status)
    return JobResponse.from_entity(job)


@router.get("/{job_id}/eligibility", response_model=EligibilityResponse)
async def check_eligibility(
    job_id: UUID, principal: ArtistPrincipal, use_case: EligibilityUseCaseDep
):
    """Tell the calling artist whether they can apply, and why not."""
    result = await use_case.execute(job_id, principal.id)
    return EligibilityResponse(
        job_id=result.job_id,
        artist_id=result.artist_id,
        can_apply=result.can_apply,
        reasons=result.reasons,
    )
