"""Wagerline exceptions."""

from typing import Iterable
from uuid import UUID


class WagerlineError(Exception):
    """Base Wagerline exception."""

    pass


class ValidationError(WagerlineError):
    """A field or cross-field rule failed; nothing was persisted."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field} {message}" for field, messages in errors.items() for message in messages
        )
        super().__init__(f"Validation failed: {details}")


class NotFoundError(WagerlineError):
    """The targeted entity does not exist."""

    def __init__(self, entity: str, entity_id: UUID):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class DownstreamDeliveryFailure(WagerlineError):
    """A notification publish or payout submission failed."""

    def __init__(self, target: str, message: str):
        super().__init__(f"Delivery to {target} failed: {message}")
        self.target = target


class PartialSettlementFailure(WagerlineError):
    """Some bets of an event could not be settled."""

    def __init__(self, event_id: UUID, failed_bet_ids: Iterable[UUID]):
        self.event_id = event_id
        self.failed_bet_ids = list(failed_bet_ids)
        ids = ", ".join(str(bet_id) for bet_id in self.failed_bet_ids)
        super().__init__(
            f"{len(self.failed_bet_ids)} bet(s) failed to settle for event {event_id}: {ids}"
        )
