"""Event database model."""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Numeric, String
from sqlalchemy.orm import relationship

from wagerline.database.base import Base
from wagerline.models.base import TimestampMixin, UUIDMixin


class EventStatus(str, Enum):
    """Event lifecycle states."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class Event(Base, UUIDMixin, TimestampMixin):
    """Real-world event that bets are placed against."""

    __tablename__ = "events"

    name = Column(String(255), nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False)
    odds = Column(Numeric(10, 4), nullable=False)

    # Lifecycle
    status = Column(String(20), nullable=False, default=EventStatus.UPCOMING.value)
    result = Column(String(50), nullable=True)

    # Bets are removed one by one by the event service so each deletion
    # publishes its own notification; no ORM cascade here.
    bets = relationship(
        "Bet",
        back_populates="event",
        order_by="Bet.created_at",
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('upcoming', 'ongoing', 'completed')",
            name="valid_event_status",
        ),
        CheckConstraint(
            "result IS NULL OR status = 'completed'",
            name="result_requires_completed",
        ),
        CheckConstraint("odds > 0", name="positive_event_odds"),
        Index("idx_events_status", "status"),
    )

    @property
    def is_settleable(self) -> bool:
        """Completed with a known result."""
        return self.status == EventStatus.COMPLETED.value and self.result is not None

    def __repr__(self) -> str:
        return f"<Event {self.name[:50]} ({self.status})>"
