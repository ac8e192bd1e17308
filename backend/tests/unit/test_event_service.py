"""Tests for event validation, lifecycle notifications and deletion."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from wagerline.exceptions import NotFoundError, ValidationError
from wagerline.models import Bet, Event

from conftest import FailingNotifier


def test_create_event_publishes_full_record(db, services, notifier, make_event):
    event = make_event()

    assert event.status == "upcoming"
    assert event.result is None
    assert notifier.messages == [("event_created", services.events.serialize(event))]

    payload = notifier.messages[0][1]
    assert payload["id"] == str(event.id)
    assert payload["name"] == "Final"
    assert Decimal(payload["odds"]) == Decimal("1.80")


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": ""}, "name"),
        ({"name": "   "}, "name"),
        ({"start_time": None}, "start_time"),
        ({"odds": Decimal("0")}, "odds"),
        ({"odds": Decimal("-1.5")}, "odds"),
        ({"odds": Decimal("1.80001")}, "odds"),
        ({"odds": None}, "odds"),
        ({"status": "postponed"}, "status"),
        ({"status": None}, "status"),
    ],
)
def test_create_event_rejects_invalid_fields(db, notifier, make_event, overrides, field):
    with pytest.raises(ValidationError) as exc_info:
        make_event(**overrides)

    assert field in exc_info.value.errors
    assert notifier.messages == []
    assert db.scalar(select(func.count()).select_from(Event)) == 0


def test_result_rejected_unless_completed(db, notifier, make_event):
    with pytest.raises(ValidationError) as exc_info:
        make_event(status="ongoing", result="win")

    assert exc_info.value.errors["result"] == ["can only be set when the event is completed"]
    assert "result can only be set when the event is completed" in str(exc_info.value)
    assert notifier.messages == []


def test_result_allowed_when_completed(make_event):
    event = make_event(status="completed", result="win")

    assert event.status == "completed"
    assert event.result == "win"


def test_result_must_be_registered_outcome(db, notifier, make_event):
    with pytest.raises(ValidationError) as exc_info:
        make_event(status="completed", result="abandoned")

    assert exc_info.value.errors["result"] == ["is not a recognised outcome"]
    assert notifier.messages == []


def test_unknown_fields_are_rejected(make_event):
    with pytest.raises(ValidationError) as exc_info:
        make_event(venue="Wembley")

    assert "venue" in exc_info.value.errors


def test_update_publishes_event_updated(db, services, notifier, make_event):
    event = make_event()
    notifier.clear()

    updated = services.events.update_event(db, event.id, name="Updated Event")

    assert updated.name == "Updated Event"
    assert notifier.messages == [("event_updated", services.events.serialize(updated))]


def test_rejected_update_leaves_prior_state(db, services, notifier, make_event):
    event = make_event(status="ongoing")
    notifier.clear()

    with pytest.raises(ValidationError):
        services.events.update_event(db, event.id, result="win")

    db.expire_all()
    stored = db.get(Event, event.id)
    assert stored.status == "ongoing"
    assert stored.result is None
    assert notifier.messages == []


def test_leaving_completed_requires_clearing_result(db, services, make_event):
    event = make_event(status="completed", result="draw")

    with pytest.raises(ValidationError):
        services.events.update_event(db, event.id, status="ongoing")

    reopened = services.events.update_event(db, event.id, status="ongoing", result=None)
    assert reopened.status == "ongoing"
    assert reopened.result is None


def test_status_transitions_are_not_ordered(db, services, make_event):
    event = make_event(status="ongoing")

    event = services.events.update_event(db, event.id, status="upcoming")

    assert event.status == "upcoming"


def test_update_missing_event_raises_not_found(db, services, notifier):
    with pytest.raises(NotFoundError):
        services.events.update_event(db, uuid4(), name="Ghost")

    assert notifier.messages == []


def test_destroy_event_deletes_bets_then_event(db, services, notifier, make_event, make_bet):
    event = make_event(status="ongoing")
    first = make_bet(event)
    second = make_bet(event, predicted_outcome="lose")
    bet_ids = {str(first.id), str(second.id)}
    event_id = event.id
    notifier.clear()

    services.events.destroy_event(db, event_id)

    channels = [channel for channel, _ in notifier.messages]
    assert channels == ["bet_deleted", "bet_deleted", "event_deleted"]
    assert {payload["id"] for payload in notifier.on("bet_deleted")} == bet_ids
    assert notifier.messages[-1][1] == {"id": str(event_id)}
    assert all(list(payload) == ["id"] for _, payload in notifier.messages)

    assert db.get(Event, event_id) is None
    assert db.scalar(select(func.count()).select_from(Bet)) == 0


def test_destroy_missing_event_raises_not_found(db, services):
    with pytest.raises(NotFoundError):
        services.events.destroy_event(db, uuid4())


def test_notification_failure_does_not_roll_back(db, dispatcher, registry):
    from wagerline.services import create_services

    services = create_services(
        notifier=FailingNotifier(), dispatcher=dispatcher, outcome_registry=registry
    )

    event = services.events.create_event(
        db,
        name="Derby",
        start_time=datetime(2026, 5, 1, tzinfo=timezone.utc),
        odds=Decimal("2.10"),
    )

    assert db.get(Event, event.id) is not None


def test_get_events_filters_by_status(db, services, make_event):
    from wagerline.models import EventStatus

    make_event(name="Semi", status="completed", result="lose")
    make_event(name="Final", status="upcoming")

    completed = services.events.get_events(db, status=EventStatus.COMPLETED)

    assert [event.name for event in completed] == ["Semi"]
