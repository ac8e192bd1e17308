"""Bet lifecycle and settlement transition service."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from wagerline.exceptions import DownstreamDeliveryFailure, NotFoundError, ValidationError
from wagerline.models import Bet, BetOutcome, BetStatus, Event, User
from wagerline.schemas import BetFields, BetRecord, WinningRecord, validate_fields
from wagerline.services.notifier import (
    BET_CREATED,
    BET_DELETED,
    BET_UPDATED,
    BET_WINNING_UPDATED,
    ChangeNotifier,
    publish_safely,
)
from wagerline.services.payouts import PayoutDispatcher

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = tuple(BetFields.model_fields)
TERMINAL_STATUSES = (BetStatus.COMPLETED.value, BetStatus.CANCELED.value)


class BetService:
    """
    Handles bet creation, updates, deletion and the settlement transition.

    Every successful mutation publishes its lifecycle notification after the
    commit. Moving a pending bet into ``completed`` settles it: the outcome is
    recorded and, for a win, winnings are published and a payout is queued.
    """

    def __init__(self, notifier: ChangeNotifier, dispatcher: PayoutDispatcher):
        self.notifier = notifier
        self.dispatcher = dispatcher

    def get_bet(self, db: Session, bet_id: UUID) -> Bet:
        """Get a bet by ID or raise NotFoundError."""
        bet = db.get(Bet, bet_id)
        if bet is None:
            raise NotFoundError("Bet", bet_id)
        return bet

    def get_event_bets(
        self,
        db: Session,
        event_id: UUID,
        status: Optional[BetStatus] = None,
    ) -> list[Bet]:
        """Get all bets on an event, optionally filtered by status."""
        query = select(Bet).where(Bet.event_id == event_id)
        if status is not None:
            query = query.where(Bet.status == status.value)
        return list(db.scalars(query.order_by(Bet.created_at)).all())

    def create_bet(self, db: Session, **fields: Any) -> Bet:
        """Validate and persist a new bet, then publish ``bet_created``."""
        if fields.get("status") is None:
            fields["status"] = BetStatus.PENDING.value
        data = validate_fields(BetFields, fields)

        event = db.get(Event, data.event_id)
        if event is None:
            raise NotFoundError("Event", data.event_id)
        if db.get(User, data.user_id) is None:
            raise NotFoundError("User", data.user_id)

        bet = Bet(**data.model_dump())
        bet.event = event
        if bet.status == BetStatus.COMPLETED.value:
            self._record_outcome(bet)

        db.add(bet)
        db.commit()
        db.refresh(bet)

        logger.info(
            f"Created bet {bet.id}: {bet.predicted_outcome} ${bet.amount} @ {bet.odds}"
        )
        publish_safely(self.notifier, BET_CREATED, self.serialize(bet))
        return bet

    def update_bet(self, db: Session, bet_id: UUID, **changes: Any) -> Bet:
        """
        Validate and apply changes to a bet, then publish ``bet_updated``.

        Only a move from ``pending`` into ``completed`` settles the bet, against
        its event's current result. Completed and canceled bets keep their
        status for good.
        """
        bet = self.get_bet(db, bet_id)
        current = {field: getattr(bet, field) for field in WRITABLE_FIELDS}
        data = validate_fields(BetFields, {**current, **changes})

        previous_status = bet.status
        if previous_status in TERMINAL_STATUSES and data.status != previous_status:
            raise ValidationError(
                {"status": [f"cannot change once the bet is {previous_status}"]}
            )

        event = bet.event
        if data.event_id != bet.event_id:
            event = db.get(Event, data.event_id)
            if event is None:
                raise NotFoundError("Event", data.event_id)
        if data.user_id != bet.user_id and db.get(User, data.user_id) is None:
            raise NotFoundError("User", data.user_id)

        for field in changes:
            setattr(bet, field, getattr(data, field))
        bet.event = event

        settling = (
            previous_status == BetStatus.PENDING.value
            and bet.status == BetStatus.COMPLETED.value
            and bet.outcome is None
        )
        if settling:
            self._record_outcome(bet)

        db.commit()
        db.refresh(bet)

        publish_safely(self.notifier, BET_UPDATED, self.serialize(bet))
        if settling:
            self._after_settlement(bet)
        return bet

    def settle_bet(self, db: Session, bet_id: UUID) -> Bet:
        """Drive a bet through its settlement transition."""
        return self.update_bet(db, bet_id, status=BetStatus.COMPLETED.value)

    def destroy_bet(self, db: Session, bet_id: UUID) -> None:
        """Delete a bet and publish ``bet_deleted``."""
        bet = self.get_bet(db, bet_id)
        db.delete(bet)
        db.commit()

        logger.info(f"Deleted bet {bet_id}")
        publish_safely(self.notifier, BET_DELETED, {"id": str(bet_id)})

    @staticmethod
    def serialize(bet: Bet) -> dict[str, Any]:
        """Canonical JSON-ready form of a bet."""
        return BetRecord.model_validate(bet).model_dump(mode="json")

    def _record_outcome(self, bet: Bet) -> None:
        bet.outcome = BetOutcome.WON.value if bet.won() else BetOutcome.LOST.value
        bet.settled_at = datetime.now(timezone.utc)

    def _after_settlement(self, bet: Bet) -> None:
        if bet.outcome != BetOutcome.WON.value:
            logger.info(f"Settled bet {bet.id}: LOSS")
            return

        winnings = bet.winnings
        logger.info(f"Settled bet {bet.id}: WIN ${winnings}")

        payload = WinningRecord(user_id=bet.user_id, winnings=winnings)
        publish_safely(self.notifier, BET_WINNING_UPDATED, payload.model_dump(mode="json"))

        try:
            self.dispatcher.submit(bet.user_id, winnings)
        except DownstreamDeliveryFailure as e:
            logger.warning(f"Payout for bet {bet.id} not queued: {e}")
