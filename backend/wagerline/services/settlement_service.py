"""Event settlement orchestration."""

import logging
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wagerline.exceptions import PartialSettlementFailure, WagerlineError
from wagerline.models import Bet, BetOutcome, BetStatus, Event, EventStatus
from wagerline.services.bet_service import BetService

logger = logging.getLogger(__name__)


@dataclass
class SettlementReport:
    """Outcome of settling one event's pending bets."""

    event_id: UUID
    result: Optional[str]
    won: list[UUID] = field(default_factory=list)
    lost: list[UUID] = field(default_factory=list)
    failed: dict[UUID, str] = field(default_factory=dict)

    @property
    def settled(self) -> list[UUID]:
        return self.won + self.lost

    @property
    def ok(self) -> bool:
        return not self.failed

    def raise_for_failures(self) -> None:
        """Raise PartialSettlementFailure if any bet failed to settle."""
        if self.failed:
            raise PartialSettlementFailure(self.event_id, self.failed)

    def to_dict(self) -> dict:
        return {
            "event_id": str(self.event_id),
            "result": self.result,
            "won": [str(bet_id) for bet_id in self.won],
            "lost": [str(bet_id) for bet_id in self.lost],
            "failed": {str(bet_id): reason for bet_id, reason in self.failed.items()},
        }


class SettlementService:
    """
    Settles the pending bets of a completed event.

    Each bet is settled through BetService.settle_bet as its own unit of
    work; a failure on one bet is recorded and the rest still run.
    Completed and canceled bets are never touched again, so re-running
    settlement for an event is safe.
    """

    def __init__(self, bet_service: BetService):
        self.bet_service = bet_service

    def settle_event(self, db: Session, event: Event) -> SettlementReport:
        """Settle every pending bet on a completed event."""
        report = SettlementReport(event_id=event.id, result=event.result)

        if not event.is_settleable:
            logger.warning(f"Event {event.id} is not completed with a result; skipping settlement")
            return report

        bet_ids = [
            bet.id
            for bet in self.bet_service.get_event_bets(db, event.id, status=BetStatus.PENDING)
        ]

        for bet_id in bet_ids:
            try:
                bet = self.bet_service.settle_bet(db, bet_id)
            except WagerlineError as e:
                report.failed[bet_id] = str(e)
                continue
            except SQLAlchemyError as e:
                db.rollback()
                report.failed[bet_id] = str(e)
                continue

            if bet.outcome == BetOutcome.WON.value:
                report.won.append(bet_id)
            else:
                report.lost.append(bet_id)

        logger.info(
            f"Settled event {event.id} ({report.result}): "
            f"{len(report.won)} won, {len(report.lost)} lost, {len(report.failed)} failed"
        )
        if report.failed:
            logger.warning(str(PartialSettlementFailure(event.id, report.failed)))

        return report

    def find_unsettled_events(self, db: Session) -> list[Event]:
        """Completed events with a result that still have pending bets."""
        pending_bet = exists().where(
            Bet.event_id == Event.id,
            Bet.status == BetStatus.PENDING.value,
        )
        result = db.scalars(
            select(Event)
            .where(Event.status == EventStatus.COMPLETED.value)
            .where(Event.result.isnot(None))
            .where(pending_bet)
            .order_by(Event.start_time)
        )
        return list(result.all())

    def resettle_completed_events(
        self,
        db: Session,
        event_id: Optional[UUID] = None,
    ) -> list[SettlementReport]:
        """
        Recovery pass: settle bets left pending on completed events.

        With ``event_id`` only that event is scanned.
        """
        if event_id is not None:
            events = [event for event in self.find_unsettled_events(db) if event.id == event_id]
        else:
            events = self.find_unsettled_events(db)

        if not events:
            logger.info("No completed events with pending bets")
            return []

        return [self.settle_event(db, event) for event in events]
