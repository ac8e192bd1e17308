"""Async payout dispatch."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from kombu.exceptions import OperationalError

from wagerline.exceptions import DownstreamDeliveryFailure

logger = logging.getLogger(__name__)


class PayoutDispatcher:
    """Accepts "credit these winnings" work items for out-of-band processing."""

    def submit(self, user_id: UUID, winnings: Decimal) -> None:
        raise NotImplementedError


class CeleryPayoutDispatcher(PayoutDispatcher):
    """Enqueues the ``tasks.process_winnings`` Celery task."""

    def __init__(self, queue: Optional[str] = None):
        if queue is None:
            from wagerline.config import get_settings

            queue = get_settings().payouts.queue
        self.queue = queue

    def submit(self, user_id: UUID, winnings: Decimal) -> None:
        from wagerline.tasks.payout_tasks import process_winnings

        # JSON task serializer: decimals travel as strings
        try:
            result = process_winnings.apply_async(
                args=(str(user_id), str(winnings)),
                queue=self.queue,
            )
        except OperationalError as e:
            raise DownstreamDeliveryFailure("payout queue", str(e)) from e

        logger.info(f"Queued payout of {winnings} for user {user_id} (task {result.id})")
