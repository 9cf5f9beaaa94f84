"""
Prometheus metrics for system monitoring.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

from marketplace.config.logging import get_logger

logger = get_logger(__name__)


def _build_registry() -> CollectorRegistry:
    """Create the registry, aggregating across processes when configured."""
    registry = CollectorRegistry()
    multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR")
    if multiproc_dir and os.path.isdir(multiproc_dir):
        multiprocess.MultiProcessCollector(registry)
        logger.info("Multiprocess metrics collector enabled", path=multiproc_dir)
    return registry


registry = _build_registry()


API_REQUESTS = Counter(
    "api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
    registry=registry,
)

API_REQUEST_DURATION = Histogram(
    "api_request_duration_seconds",
    "API request duration in seconds",
    ["method", "endpoint"],
    registry=registry,
)

JOBS_CREATED = Counter(
    "jobs_created_total",
    "Total number of jobs created",
    ["category"],
    registry=registry,
)

JOB_VIEWS = Counter(
    "job_views_total",
    "Total number of recorded job views",
    ["viewer"],
    registry=registry,
)

PROPOSALS_SUBMITTED = Counter(
    "proposals_submitted_total",
    "Total number of proposals submitted",
    registry=registry,
)

PROPOSAL_DECISIONS = Counter(
    "proposal_decisions_total",
    "Total number of proposal status decisions",
    ["decision"],
    registry=registry,
)

ACCEPT_CONFLICTS = Counter(
    "proposal_accept_conflicts_total",
    "Accept attempts that lost the job assignment race",
    registry=registry,
)

REVIEWS_CREATED = Counter(
    "reviews_created_total",
    "Total number of reviews created",
    ["status"],
    registry=registry,
)

RATING_RECOMPUTATIONS = Counter(
    "rating_recomputations_total",
    "Artist rating recomputations",
    ["outcome"],
    registry=registry,
)

RATING_DRIFT_CORRECTED = Counter(
    "rating_drift_corrected_total",
    "Artist ratings rewritten by reconciliation",
    registry=registry,
)

NOTIFICATIONS_CREATED = Counter(
    "notifications_created_total",
    "Notifications produced by the fan-out",
    ["type"],
    registry=registry,
)

RATE_LIMIT_HITS = Counter(
    "rate_limit_hits_total",
    "Requests rejected by the rate limiter",
    registry=registry,
)

ERRORS_TOTAL = Counter(
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
    registry=registry,
)


def record_api_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record API request metric."""
    API_REQUESTS.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
    API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def record_job_creation(category: str):
    """Record job creation metric."""
    JOBS_CREATED.labels(category=category).inc()


def record_job_view(by_artist: bool):
    JOB_VIEWS.labels(viewer="artist" if by_artist else "anonymous").inc()


def record_proposal_submission():
    PROPOSALS_SUBMITTED.inc()


def record_proposal_decision(decision: str):
    """Record an accepted, rejected or withdrawn proposal."""
    PROPOSAL_DECISIONS.labels(decision=decision).inc()


def record_accept_conflict():
    ACCEPT_CONFLICTS.inc()


def record_review_creation(status: str):
    REVIEWS_CREATED.labels(status=status).inc()


def record_rating_recompute(outcome: str):
    RATING_RECOMPUTATIONS.labels(outcome=outcome).inc()


def record_rating_drift(corrected: int):
    if corrected:
        RATING_DRIFT_CORRECTED.inc(corrected)


def record_notifications(notification_type: str, count: int):
    if count:
        NOTIFICATIONS_CREATED.labels(type=notification_type).inc(count)


def record_rate_limit_hit():
    RATE_LIMIT_HITS.inc()


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics():
    """Get all metrics in Prometheus format."""
    return generate_latest(registry)


def get_metrics_content_type():
    """Get the content type for metrics."""
    return CONTENT_TYPE_LATEST
