"""
Use cases package.

This package contains the business logic use cases that orchestrate
the application services and repositories.
"""

from .accept_proposal import AcceptProposalResult, AcceptProposalUseCase
from .artist_reviews import ArtistReviewsResult, ListArtistReviewsUseCase
from .change_job_status import ChangeJobStatusUseCase
from .check_application_eligibility import (
    CheckApplicationEligibilityUseCase,
    EligibilityResult,
)
from .create_job import CreateJobRequest, CreateJobResult, CreateJobUseCase
from .create_review import CreateReviewRequest, CreateReviewUseCase
from .delete_job import DeleteJobUseCase
from .delete_review import DeleteReviewUseCase
from .get_job import GetJobUseCase
from .list_client_jobs import JobPage, ListClientJobsUseCase
from .moderate_review import FlagReviewUseCase, ModerateReviewUseCase
from .notification_inbox import NotificationInbox, NotificationPage
from .proposal_queries import ProposalPage, ProposalQueries
from .reject_proposal import RejectProposalUseCase
from .respond_to_review import RespondToReviewUseCase
from .submit_proposal import SubmitProposalRequest, SubmitProposalUseCase
from .update_job import UpdateJobRequest, UpdateJobUseCase
from .update_proposal import UpdateProposalUseCase
from .withdraw_proposal import WithdrawProposalUseCase

__all__ = [
    "AcceptProposalResult",
    "AcceptProposalUseCase",
    "ArtistReviewsResult",
    "ChangeJobStatusUseCase",
    "CheckApplicationEligibilityUseCase",
    "CreateJobRequest",
    "CreateJobResult",
    "CreateJobUseCase",
    "CreateReviewRequest",
    "CreateReviewUseCase",
    "DeleteJobUseCase",
    "DeleteReviewUseCase",
    "EligibilityResult",
    "FlagReviewUseCase",
    "GetJobUseCase",
    "JobPage",
    "ListArtistReviewsUseCase",
    "ListClientJobsUseCase",
    "ModerateReviewUseCase",
    "NotificationInbox",
    "NotificationPage",
    "ProposalPage",
    "ProposalQueries",
    "RejectProposalUseCase",
    "RespondToReviewUseCase",
    "SubmitProposalRequest",
    "SubmitProposalUseCase",
    "UpdateJobRequest",
    "UpdateJobUseCase",
    "UpdateProposalUseCase",
    "WithdrawProposalUseCase",
]
