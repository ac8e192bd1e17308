"""Database models module."""

from wagerline.models.bet import Bet, BetOutcome, BetStatus
from wagerline.models.event import Event, EventStatus
from wagerline.models.result_type import ResultType
from wagerline.models.user import User

__all__ = [
    "Bet",
    "BetOutcome",
    "BetStatus",
    "Event",
    "EventStatus",
    "ResultType",
    "User",
]
