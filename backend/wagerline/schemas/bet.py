"""Bet Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from wagerline.models.bet import BetStatus
from wagerline.schemas.common import BaseSchema, FieldsSchema, TimestampSchema


class BetFields(FieldsSchema):
    """Writable bet fields."""

    user_id: UUID
    event_id: UUID
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=2)
    odds: Decimal = Field(gt=0, max_digits=10, decimal_places=4)
    predicted_outcome: str = Field(min_length=1)
    status: BetStatus = Field(default=BetStatus.PENDING, validate_default=True)


class BetRecord(TimestampSchema):
    """Canonical serialized bet, used as notification payload."""

    id: UUID
    user_id: UUID
    event_id: UUID
    amount: Decimal
    odds: Decimal
    predicted_outcome: str
    status: str
    outcome: Optional[str]
    settled_at: Optional[datetime]


class WinningRecord(BaseSchema):
    """Payload of a winning settlement."""

    user_id: UUID
    winnings: Decimal
