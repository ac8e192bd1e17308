"""Payout Celery tasks."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from wagerline.celery_config import celery_app, settings
from wagerline.database.session import get_db_context
from wagerline.models import User

logger = logging.getLogger(__name__)


@celery_app.task(
    name="tasks.process_winnings",
    bind=True,
    max_retries=settings.payouts.max_retries,
    default_retry_delay=settings.payouts.retry_delay_seconds,
)
def process_winnings(self, user_id: str, winnings: str):
    """
    Credits a winning bet's payout to the user's balance.
    """
    amount = Decimal(winnings)

    try:
        with get_db_context() as db:
            user = db.get(User, UUID(user_id), with_for_update=True)
            if user is None:
                logger.warning(f"Payout skipped: user {user_id} not found")
                return {"user_id": user_id, "skipped": True, "reason": "user not found"}

            user.balance = (Decimal(user.balance) + amount).quantize(Decimal("0.01"))
            db.commit()
            new_balance = user.balance

    except SQLAlchemyError as e:
        logger.error(f"Payout of {winnings} for user {user_id} failed: {e}")
        raise self.retry(exc=e)

    logger.info(f"Credited {amount} to user {user_id} (balance ${new_balance})")
    return {"user_id": user_id, "credited": str(amount), "balance": str(new_balance)}
