"""
Celery configuration for the payout and settlement recovery workers.

This module configures the Celery application with:
- Redis broker and result backend
- Task routing to queues
- Beat schedule for the settlement recovery scan
- Logfire instrumentation for observability
"""

import logging

from celery import Celery
from celery.signals import worker_process_init

from wagerline.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

celery_app = Celery(
    "wagerline",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "wagerline.tasks.payout_tasks",
        "wagerline.tasks.settlement_tasks",
    ],
)

celery_app.conf.update(
    # Serialization
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    # Timezone
    timezone="UTC",
    enable_utc=True,
    # Task results
    result_expires=3600,
    # Task routing
    task_routes={
        "tasks.process_winnings": {"queue": settings.payouts.queue},
        "tasks.resettle_completed_events": {"queue": "settlements"},
    },
    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    # A payout must not be lost if a worker dies mid-task
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # Monitoring
    worker_send_task_events=True,
    task_send_sent_event=True,
)

celery_app.conf.beat_schedule = {
    "resettle-completed-events": {
        "task": "tasks.resettle_completed_events",
        "schedule": settings.settlement.resettle_interval_seconds,
    },
}


@worker_process_init.connect
def init_worker_process(**kwargs) -> None:
    """Configure observability once per worker process."""
    from wagerline.observability import initialize_logfire

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    initialize_logfire(settings)
    logger.info("Celery worker initialized")
