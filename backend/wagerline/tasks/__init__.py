"""Celery tasks module."""

from wagerline.tasks.payout_tasks import process_winnings
from wagerline.tasks.settlement_tasks import resettle_completed_events

__all__ = [
    "process_winnings",
    "resettle_completed_events",
]
