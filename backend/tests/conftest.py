"""Shared fixtures: in-memory database, recording collaborators, services."""

from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import wagerline.models  # noqa: F401
from wagerline.database.base import Base
from wagerline.exceptions import DownstreamDeliveryFailure
from wagerline.models import User
from wagerline.services import (
    ChangeNotifier,
    PayoutDispatcher,
    StaticOutcomeRegistry,
    create_services,
)

OUTCOME_LABELS = ["win", "lose", "draw", "penalty"]


class RecordingNotifier(ChangeNotifier):
    """Keeps every published (channel, payload) pair in order."""

    def __init__(self):
        self.messages = []

    def publish(self, channel, payload):
        self.messages.append((channel, payload))

    def on(self, channel):
        return [payload for name, payload in self.messages if name == channel]

    def clear(self):
        self.messages.clear()


class RecordingDispatcher(PayoutDispatcher):
    def __init__(self):
        self.submitted = []

    def submit(self, user_id, winnings):
        self.submitted.append((user_id, winnings))


class FailingNotifier(ChangeNotifier):
    def publish(self, channel, payload):
        raise DownstreamDeliveryFailure(channel, "connection refused")


class FailingDispatcher(PayoutDispatcher):
    def submit(self, user_id, winnings):
        raise DownstreamDeliveryFailure("payout queue", "broker unavailable")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def db_context(session_factory):
    """Drop-in replacement for wagerline.database.session.get_db_context."""

    @contextmanager
    def _context():
        session = session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return _context


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def registry():
    return StaticOutcomeRegistry(OUTCOME_LABELS)


@pytest.fixture
def services(notifier, dispatcher, registry):
    return create_services(notifier=notifier, dispatcher=dispatcher, outcome_registry=registry)


@pytest.fixture
def user(db):
    user = User(username="alice", balance=Decimal("0.00"))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_event(db, services):
    def _make_event(**overrides):
        fields = {
            "name": "Final",
            "start_time": datetime(2026, 6, 1, 18, 0, tzinfo=timezone.utc),
            "odds": Decimal("1.80"),
            "status": "upcoming",
        }
        fields.update(overrides)
        return services.events.create_event(db, **fields)

    return _make_event


@pytest.fixture
def make_bet(db, services, user):
    def _make_bet(event, **overrides):
        fields = {
            "user_id": user.id,
            "event_id": event.id,
            "amount": Decimal("100"),
            "odds": Decimal("2.5"),
            "predicted_outcome": "win",
        }
        fields.update(overrides)
        return services.bets.create_bet(db, **fields)

    return _make_bet
