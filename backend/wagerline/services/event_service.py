"""Event lifecycle management service."""

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from wagerline.exceptions import NotFoundError
from wagerline.models import Event, EventStatus
from wagerline.schemas import EventFields, EventRecord, validate_fields
from wagerline.services.bet_service import BetService
from wagerline.services.notifier import (
    EVENT_CREATED,
    EVENT_DELETED,
    EVENT_UPDATED,
    ChangeNotifier,
    publish_safely,
)
from wagerline.services.outcome_registry import OutcomeRegistry
from wagerline.services.settlement_service import SettlementReport, SettlementService

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = tuple(EventFields.model_fields)


class EventService:
    """
    Manages the lifecycle of events.

    Operations run validation -> persistence -> notification in that order.
    An update that lands the event in ``completed`` with a result settles
    its pending bets before returning.
    """

    def __init__(
        self,
        notifier: ChangeNotifier,
        outcome_registry: OutcomeRegistry,
        bet_service: BetService,
        settlement_service: Optional[SettlementService] = None,
    ):
        self.notifier = notifier
        self.outcome_registry = outcome_registry
        self.bet_service = bet_service
        self.settlement_service = settlement_service or SettlementService(bet_service)

    def get_event(self, db: Session, event_id: UUID) -> Event:
        """Get an event by ID or raise NotFoundError."""
        event = db.get(Event, event_id)
        if event is None:
            raise NotFoundError("Event", event_id)
        return event

    def get_events(self, db: Session, status: Optional[EventStatus] = None) -> list[Event]:
        """List events, optionally filtered by status."""
        query = select(Event)
        if status is not None:
            query = query.where(Event.status == status.value)
        return list(db.scalars(query.order_by(Event.start_time)).all())

    def create_event(self, db: Session, **fields: Any) -> Event:
        """Validate and persist a new event, then publish ``event_created``."""
        data = self._validate(db, fields)

        event = Event(**data.model_dump())
        db.add(event)
        db.commit()
        db.refresh(event)

        logger.info(f"Created event {event.id}: {event.name} ({event.status})")
        publish_safely(self.notifier, EVENT_CREATED, self.serialize(event))
        return event

    def update_event(self, db: Session, event_id: UUID, **changes: Any) -> Event:
        """
        Validate and apply changes to an event, then publish ``event_updated``.

        If the event is now completed with a result and this update changed
        its status or result, pending bets are settled synchronously.
        """
        event, _ = self.update_event_and_settle(db, event_id, **changes)
        return event

    def update_event_and_settle(
        self, db: Session, event_id: UUID, **changes: Any
    ) -> tuple[Event, Optional[SettlementReport]]:
        """Same as ``update_event`` but also returns this update's settlement report."""
        event = self.get_event(db, event_id)
        current = {field: getattr(event, field) for field in WRITABLE_FIELDS}
        data = self._validate(db, {**current, **changes})

        previous = (event.status, event.result)
        for field in changes:
            setattr(event, field, getattr(data, field))

        db.commit()
        db.refresh(event)

        logger.info(f"Updated event {event.id}: {event.name} ({event.status})")
        publish_safely(self.notifier, EVENT_UPDATED, self.serialize(event))

        report = None
        if event.is_settleable and previous != (event.status, event.result):
            report = self.settlement_service.settle_event(db, event)
        return event, report

    def destroy_event(self, db: Session, event_id: UUID) -> None:
        """
        Delete an event and each of its bets.

        Bets go first, one destroy at a time, so every bet publishes its own
        ``bet_deleted`` before ``event_deleted`` goes out.
        """
        event = self.get_event(db, event_id)
        bet_ids = [bet.id for bet in event.bets]

        for bet_id in bet_ids:
            self.bet_service.destroy_bet(db, bet_id)

        db.delete(event)
        db.commit()

        logger.info(f"Deleted event {event_id} and {len(bet_ids)} bet(s)")
        publish_safely(self.notifier, EVENT_DELETED, {"id": str(event_id)})

    @staticmethod
    def serialize(event: Event) -> dict[str, Any]:
        """Canonical JSON-ready form of an event."""
        return EventRecord.model_validate(event).model_dump(mode="json")

    def _validate(self, db: Session, data: dict[str, Any]) -> EventFields:
        context = None
        if data.get("result") is not None:
            context = {"outcome_labels": self.outcome_registry.current_outcome_labels(db)}
        return validate_fields(EventFields, data, context=context)
