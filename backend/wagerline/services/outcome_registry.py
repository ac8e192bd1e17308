"""Registry of permitted event outcome labels."""

import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from wagerline.models import ResultType

logger = logging.getLogger(__name__)


class OutcomeRegistry:
    """Supplies the current set of valid event result labels."""

    def current_outcome_labels(self, db: Optional[Session] = None) -> set[str]:
        raise NotImplementedError


class StaticOutcomeRegistry(OutcomeRegistry):
    """Fixed label set, typically from configuration."""

    def __init__(self, labels: Iterable[str]):
        self.labels = frozenset(labels)

    def current_outcome_labels(self, db: Optional[Session] = None) -> set[str]:
        return set(self.labels)


class DatabaseOutcomeRegistry(OutcomeRegistry):
    """Labels read from the ``result_types`` lookup table on every call."""

    def current_outcome_labels(self, db: Optional[Session] = None) -> set[str]:
        if db is None:
            raise ValueError("DatabaseOutcomeRegistry requires a database session")
        return set(db.scalars(select(ResultType.name)).all())

    def seed(self, db: Session, labels: Iterable[str]) -> list[str]:
        """Insert any missing labels. Returns the labels that were added."""
        existing = self.current_outcome_labels(db)
        added = [label for label in dict.fromkeys(labels) if label not in existing]
        for label in added:
            db.add(ResultType(name=label))
        db.commit()

        if added:
            logger.info(f"Seeded outcome labels: {', '.join(added)}")
        return added
