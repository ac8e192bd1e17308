"""User database model (owned by the accounts system, referenced here)."""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, Numeric, String
from sqlalchemy.orm import relationship

from wagerline.database.base import Base
from wagerline.models.base import TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """Bettor account with a cash balance credited by payouts."""

    __tablename__ = "users"

    username = Column(String(100), unique=True, nullable=False, index=True)
    balance = Column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
    )

    bets = relationship("Bet", back_populates="user", lazy="dynamic")

    __table_args__ = (
        CheckConstraint("balance >= 0", name="balance_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<User {self.username} (${self.balance})>"
