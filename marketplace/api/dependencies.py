"""
FastAPI dependency injection container.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.services.notification_fanout import NotificationFanout
from marketplace.application.services.rating_aggregator import RatingAggregator
from marketplace.application.use_cases.accept_proposal import AcceptProposalUseCase
from marketplace.application.use_cases.artist_reviews import ListArtistReviewsUseCase
from marketplace.application.use_cases.change_job_status import (
    ChangeJobStatusUseCase,
)
from marketplace.application.use_cases.check_application_eligibility import (
    CheckApplicationEligibilityUseCase,
)
from marketplace.application.use_cases.create_job import CreateJobUseCase
from marketplace.application.use_cases.create_review import CreateReviewUseCase
from marketplace.application.use_cases.delete_job import DeleteJobUseCase
from marketplace.application.use_cases.delete_review import DeleteReviewUseCase
from marketplace.application.use_cases.get_job import GetJobUseCase
from marketplace.application.use_cases.list_client_jobs import ListClientJobsUseCase
from marketplace.application.use_cases.moderate_review import (
    FlagReviewUseCase,
    ModerateReviewUseCase,
)
from marketplace.application.use_cases.notification_inbox import NotificationInbox
from marketplace.application.use_cases.proposal_queries import ProposalQueries
from marketplace.application.use_cases.reject_proposal import RejectProposalUseCase
from marketplace.application.use_cases.respond_to_review import (
    RespondToReviewUseCase,
)
from marketplace.application.use_cases.submit_proposal import SubmitProposalUseCase
from marketplace.application.use_cases.update_job import UpdateJobUseCase
from marketplace.application.use_cases.update_proposal import UpdateProposalUseCase
from marketplace.application.use_cases.withdraw_proposal import (
    WithdrawProposalUseCase,
)
from marketplace.config.database import get_db_session
from marketplace.infrastructure.database.repositories.job_repository import (
    JobRepository,
)
from marketplace.infrastructure.database.repositories.notification_repository import (
    NotificationRepository,
)
from marketplace.infrastructure.database.repositories.proposal_repository import (
    ProposalRepository,
)
from marketplace.infrastructure.database.repositories.review_repository import (
    ReviewRepository,
)
from marketplace.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from marketplace.infrastructure.database.repositories.user_repository import (
    UserRepository,
)


# Database Dependencies
async def get_job_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    """Get job repository instance."""
    return JobRepository(db)


async def get_proposal_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ProposalRepository:
    """Get proposal repository instance."""
    return ProposalRepository(db)


async def get_review_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ReviewRepository:
    """Get review repository instance."""
    return ReviewRepository(db)


async def get_user_repository(
    db: AsyncSession = Depends(get_db_session),
) -> UserRepository:
    """Get user repository instance."""
    return UserRepository(db)


async def get_notification_repository(
    db: AsyncSession = Depends(get_db_session),
) -> NotificationRepository:
    """Get notification repository instance."""
    return NotificationRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)


JobRepositoryDep = Annotated[JobRepository, Depends(get_job_repository)]
ProposalRepositoryDep = Annotated[ProposalRepository, Depends(get_proposal_repository)]
ReviewRepositoryDep = Annotated[ReviewRepository, Depends(get_review_repository)]
UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
NotificationRepositoryDep = Annotated[
    NotificationRepository, Depends(get_notification_repository)
]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]


# Service Dependencies
async def get_notification_fanout(
    user_repo: UserRepositoryDep,
    notification_repo: NotificationRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> NotificationFanout:
    """Get notification fan-out instance."""
    return NotificationFanout(user_repo, notification_repo, transaction_service)


async def get_rating_aggregator(
    review_repo: ReviewRepositoryDep,
    user_repo: UserRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> RatingAggregator:
    """Get rating aggregator instance."""
    return RatingAggregator(review_repo, user_repo, transaction_service)


NotificationFanoutDep = Annotated[NotificationFanout, Depends(get_notification_fanout)]
RatingAggregatorDep = Annotated[RatingAggregator, Depends(get_rating_aggregator)]


# Use Case Dependencies
async def get_create_job_use_case(
    job_repo: JobRepositoryDep,
    fanout: NotificationFanoutDep,
    transaction_service: TransactionServiceDep,
) -> CreateJobUseCase:
    return CreateJobUseCase(job_repo, fanout, transaction_service)


async def get_get_job_use_case(
    job_repo: JobRepositoryDep, transaction_service: TransactionServiceDep
) -> GetJobUseCase:
    return GetJobUseCase(job_repo, transaction_service)


async def get_list_client_jobs_use_case(
    job_repo: JobRepositoryDep, transaction_service: TransactionServiceDep
) -> ListClientJobsUseCase:
    return ListClientJobsUseCase(job_repo, transaction_service)


async def get_update_job_use_case(
    job_repo: JobRepositoryDep, transaction_service: TransactionServiceDep
) -> UpdateJobUseCase:
    return UpdateJobUseCase(job_repo, transaction_service)


async def get_delete_job_use_case(
    job_repo: JobRepositoryDep, transaction_service: TransactionServiceDep
) -> DeleteJobUseCase:
    return DeleteJobUseCase(job_repo, transaction_service)


async def get_change_job_status_use_case(
    job_repo: JobRepositoryDep, transaction_service: TransactionServiceDep
) -> ChangeJobStatusUseCase:
    return ChangeJobStatusUseCase(job_repo, transaction_service)


async def get_eligibility_use_case(
    job_repo: JobRepositoryDep,
    proposal_repo: ProposalRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> CheckApplicationEligibilityUseCase:
    return CheckApplicationEligibilityUseCase(job_repo, proposal_repo, transaction_service)


async def get_submit_proposal_use_case(
    job_repo: JobRepositoryDep,
    proposal_repo: ProposalRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> SubmitProposalUseCase:
    return SubmitProposalUseCase(job_repo, proposal_repo, transaction_service)


async def get_update_proposal_use_case(
    proposal_repo: ProposalRepositoryDep, transaction_service: TransactionServiceDep
) -> UpdateProposalUseCase:
    return UpdateProposalUseCase(proposal_repo, transaction_service)


async def get_accept_proposal_use_case(
    job_repo: JobRepositoryDep,
    proposal_repo: ProposalRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> AcceptProposalUseCase:
    return AcceptProposalUseCase(job_repo, proposal_repo, transaction_service)


async def get_reject_proposal_use_case(
    job_repo: JobRepositoryDep,
    proposal_repo: ProposalRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> RejectProposalUseCase:
    return RejectProposalUseCase(job_repo, proposal_repo, transaction_service)


async def get_withdraw_proposal_use_case(
    proposal_repo: ProposalRepositoryDep, transaction_service: TransactionServiceDep
) -> WithdrawProposalUseCase:
    return WithdrawProposalUseCase(proposal_repo, transaction_service)


async def get_proposal_queries(
    job_repo: JobRepositoryDep,
    proposal_repo: ProposalRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> ProposalQueries:
    return ProposalQueries(job_repo, proposal_repo, transaction_service)


async def get_create_review_use_case(
    job_repo: JobRepositoryDep,
    review_repo: ReviewRepositoryDep,
    aggregator: RatingAggregatorDep,
    transaction_service: TransactionServiceDep,
) -> CreateReviewUseCase:
    return CreateReviewUseCase(job_repo, review_repo, aggregator, transaction_service)


async def get_moderate_review_use_case(
    review_repo: ReviewRepositoryDep,
    aggregator: RatingAggregatorDep,
    transaction_service: TransactionServiceDep,
) -> ModerateReviewUseCase:
    return ModerateReviewUseCase(review_repo, aggregator, transaction_service)


async def get_flag_review_use_case(
    review_repo: ReviewRepositoryDep,
    aggregator: RatingAggregatorDep,
    transaction_service: TransactionServiceDep,
) -> FlagReviewUseCase:
    return FlagReviewUseCase(review_repo, aggregator, transaction_service)


async def get_respond_to_review_use_case(
    review_repo: ReviewRepositoryDep,
    aggregator: RatingAggregatorDep,
    transaction_service: TransactionServiceDep,
) -> RespondToReviewUseCase:
    return RespondToReviewUseCase(review_repo, aggregator, transaction_service)


async def get_delete_review_use_case(
    review_repo: ReviewRepositoryDep,
    aggregator: RatingAggregatorDep,
    transaction_service: TransactionServiceDep,
) -> DeleteReviewUseCase:
    return DeleteReviewUseCase(review_repo, aggregator, transaction_service)


async def get_list_artist_reviews_use_case(
    review_repo: ReviewRepositoryDep,
) -> ListArtistReviewsUseCase:
    return ListArtistReviewsUseCase(review_repo)



async def get_notification_inbox(
    notification_repo: NotificationRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> NotificationInbox:
    return NotificationInbox(notification_repo, transaction_service)


# Type aliases for cleaner dependency injection
CreateJobUseCaseDep = Annotated[CreateJobUseCase, Depends(get_create_job_use_case)]
GetJobUseCaseDep = Annotated[GetJobUseCase, Depends(get_get_job_use_case)]
ListClientJobsUseCaseDep = Annotated[
    ListClientJobsUseCase, Depends(get_list_client_jobs_use_case)
]
UpdateJobUseCaseDep = Annotated[UpdateJobUseCase, Depends(get_update_job_use_case)]
DeleteJobUseCaseDep = Annotated[DeleteJobUseCase, Depends(get_delete_job_use_case)]
ChangeJobStatusUseCaseDep = Annotated[
    ChangeJobStatusUseCase, Depends(get_change_job_status_use_case)
]
EligibilityUseCaseDep = Annotated[
    CheckApplicationEligibilityUseCase, Depends(get_eligibility_use_case)
]
SubmitProposalUseCaseDep = Annotated[
    SubmitProposalUseCase, Depends(get_submit_proposal_use_case)
]
UpdateProposalUseCaseDep = Annotated[
    UpdateProposalUseCase, Depends(get_update_proposal_use_case)
]
AcceptProposalUseCaseDep = Annotated[
    AcceptProposalUseCase, Depends(get_accept_proposal_use_case)
]
RejectProposalUseCaseDep = Annotated[
    RejectProposalUseCase, Depends(get_reject_proposal_use_case)
]
WithdrawProposalUseCaseDep = Annotated[
    WithdrawProposalUseCase, Depends(get_withdraw_proposal_use_case)
]
ProposalQueriesDep = Annotated[ProposalQueries, Depends(get_proposal_queries)]
CreateReviewUseCaseDep = Annotated[
    CreateReviewUseCase, Depends(get_create_review_use_case)
]
ModerateReviewUseCaseDep = Annotated[
    ModerateReviewUseCase, Depends(get_moderate_review_use_case)
]
FlagReviewUseCaseDep = Annotated[FlagReviewUseCase, Depends(get_flag_review_use_case)]
RespondToReviewUseCaseDep = Annotated[
    RespondToReviewUseCase, Depends(get_respond_to_review_use_case)
]
DeleteReviewUseCaseDep = Annotated[
    DeleteReviewUseCase, Depends(get_delete_review_use_case)
]
ListArtistReviewsUseCaseDep = Annotated[
    ListArtistReviewsUseCase, Depends(get_list_artist_reviews_use_case)
]
NotificationInboxDep = Annotated[NotificationInbox, Depends(get_notification_inbox)]
