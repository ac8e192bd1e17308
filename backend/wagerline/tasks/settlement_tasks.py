"""Settlement recovery Celery tasks."""

import logging
from typing import Optional
from uuid import UUID

from wagerline.celery_config import celery_app, settings
from wagerline.database.session import get_db_context
from wagerline.exceptions import PartialSettlementFailure

logger = logging.getLogger(__name__)


@celery_app.task(
    name="tasks.resettle_completed_events",
    queue="settlements",
    bind=True,
    max_retries=settings.settlement.resettle_max_retries,
    default_retry_delay=settings.settlement.resettle_retry_delay_seconds,
)
def resettle_completed_events(self, event_id: Optional[str] = None):
    """
    Scheduled: every ``settlement.resettle_interval_seconds``

    Settles bets left pending on completed events, e.g. after a crash between
    an event's completion and the last bet's settlement.
    """
    from wagerline.services import create_services

    services = create_services()

    with get_db_context() as db:
        reports = services.settlement.resettle_completed_events(
            db, UUID(event_id) if event_id else None
        )

    summary = {
        "events_scanned": len(reports),
        "reports": [report.to_dict() for report in reports],
    }

    try:
        for report in reports:
            report.raise_for_failures()
    except PartialSettlementFailure as e:
        logger.warning(f"Resettlement incomplete: {e}")
        raise self.retry(exc=e)

    return summary
