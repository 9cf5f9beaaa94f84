"""
Celery application configuration and setup.
"""

from celery import Celery
from celery.signals import task_postrun, task_prerun, worker_process_init

from marketplace.config.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
)
from marketplace.config.settings import settings

celery_app = Celery(
    "marketplace",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["marketplace.background.tasks.rating_reconciliation"],
)

celery_app.conf.update(
    # Task routing
    task_routes={
        "reconcile_artist_ratings_task": {"queue": "maintenance"},
        "recompute_artist_rating_task": {"queue": "maintenance"},
    },
    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    worker_hijack_root_logger=False,
    # Task configuration
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,
    task_default_queue="default",
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    task_soft_time_limit=settings.CELERY_TASK_SOFT_TIME_LIMIT,
    task_acks_late=True,
    # Beat scheduler configuration
    beat_schedule={
        "reconcile-artist-ratings": {
            "task": "reconcile_artist_ratings_task",
            "schedule": float(settings.RATING_RECONCILIATION_INTERVAL_MINUTES * 60),
            "options": {"queue": "maintenance"},
        },
    },
)


@worker_process_init.connect
def init_worker_logging(**kwargs):
    configure_logging()


@task_prerun.connect
def bind_task_context(task_id=None, task=None, **kwargs):
    clear_request_context()
    bind_request_context(task_id=task_id, task_name=task.name if task else None)


@task_postrun.connect
def clear_task_context(**kwargs):
    clear_request_context()


if __name__ == "__main__":
    celery_app.start()
