"""Service layer: entity operations, settlement and their collaborators."""

from dataclasses import dataclass
from typing import Optional

from wagerline.services.bet_service import BetService
from wagerline.services.event_service import EventService
from wagerline.services.notifier import (
    ChangeNotifier,
    RedisChangeNotifier,
    create_change_notifier,
)
from wagerline.services.outcome_registry import (
    DatabaseOutcomeRegistry,
    OutcomeRegistry,
    StaticOutcomeRegistry,
)
from wagerline.services.payouts import CeleryPayoutDispatcher, PayoutDispatcher
from wagerline.services.settlement_service import SettlementReport, SettlementService


@dataclass
class Services:
    """Wired service instances sharing one set of collaborators."""

    events: EventService
    bets: BetService
    settlement: SettlementService


def create_services(
    notifier: Optional[ChangeNotifier] = None,
    dispatcher: Optional[PayoutDispatcher] = None,
    outcome_registry: Optional[OutcomeRegistry] = None,
) -> Services:
    """
    Create the service layer.

    Collaborators default to Redis notifications, Celery payouts and the
    ``result_types`` table.
    """
    notifier = notifier or create_change_notifier()
    dispatcher = dispatcher or CeleryPayoutDispatcher()
    outcome_registry = outcome_registry or DatabaseOutcomeRegistry()

    bets = BetService(notifier, dispatcher)
    settlement = SettlementService(bets)
    events = EventService(notifier, outcome_registry, bets, settlement)
    return Services(events=events, bets=bets, settlement=settlement)


__all__ = [
    "BetService",
    "CeleryPayoutDispatcher",
    "ChangeNotifier",
    "DatabaseOutcomeRegistry",
    "EventService",
    "OutcomeRegistry",
    "PayoutDispatcher",
    "RedisChangeNotifier",
    "Services",
    "SettlementReport",
    "SettlementService",
    "StaticOutcomeRegistry",
    "create_change_notifier",
    "create_services",
]
