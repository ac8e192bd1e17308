"""Bet database model."""

from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from wagerline.database.base import Base
from wagerline.models.base import TimestampMixin, UUIDMixin


class BetStatus(str, Enum):
    """Bet lifecycle states. COMPLETED is the terminal settled state."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELED = "canceled"


class BetOutcome(str, Enum):
    """How a completed bet resolved."""

    WON = "won"
    LOST = "lost"


class Bet(Base, UUIDMixin, TimestampMixin):
    """A user's wager on one predicted outcome of an event."""

    __tablename__ = "bets"

    # Foreign keys
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Bet details
    amount = Column(Numeric(15, 2), nullable=False)
    odds = Column(Numeric(10, 4), nullable=False)
    predicted_outcome = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default=BetStatus.PENDING.value)

    # Settlement
    outcome = Column(String(10), nullable=True)
    settled_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="bets")
    event = relationship("Event", back_populates="bets")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'completed', 'canceled')",
            name="valid_bet_status",
        ),
        CheckConstraint(
            "outcome IS NULL OR outcome IN ('won', 'lost')",
            name="valid_bet_outcome",
        ),
        CheckConstraint("amount > 0", name="positive_bet_amount"),
        CheckConstraint("odds > 0", name="positive_bet_odds"),
        Index("idx_bets_event_status", "event_id", "status"),
    )

    def __init__(self, **kwargs):
        if kwargs.get("status") is None:
            kwargs["status"] = BetStatus.PENDING.value
        super().__init__(**kwargs)

    def won(self) -> bool:
        """True when the prediction matches the event's result."""
        event = self.event
        if event is None or event.result is None:
            return False
        return self.predicted_outcome == event.result

    @property
    def winnings(self) -> Decimal:
        """Payout for a winning bet: amount * odds."""
        return Decimal(self.amount) * Decimal(self.odds)

    def __repr__(self) -> str:
        return f"<Bet {self.predicted_outcome} ${self.amount} @ {self.odds} ({self.status})>"
