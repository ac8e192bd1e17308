"""Pydantic schemas for validation and serialization."""

from wagerline.schemas.bet import BetFields, BetRecord, WinningRecord
from wagerline.schemas.common import BaseSchema, validate_fields
from wagerline.schemas.event import EventFields, EventRecord

__all__ = [
    "BaseSchema",
    "BetFields",
    "BetRecord",
    "EventFields",
    "EventRecord",
    "WinningRecord",
    "validate_fields",
]
