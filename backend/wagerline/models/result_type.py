"""Result type lookup table backing the outcome registry."""

from sqlalchemy import Column, String

from wagerline.database.base import Base
from wagerline.models.base import UUIDMixin


class ResultType(Base, UUIDMixin):
    """One permitted event outcome label (e.g. "win", "draw")."""

    __tablename__ = "result_types"

    name = Column(String(50), unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ResultType {self.name}>"
