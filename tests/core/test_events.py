"""Tests for folio.core.events: EventBus and Event."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from folio.core.events import SCHEMA_CHANGED, Event, EventBus

pytestmark = pytest.mark.smoke


# ---------------------------------------------------------------------------
# on / off / emit lifecycle
# ---------------------------------------------------------------------------


def test_on_off_emit_lifecycle():
    bus = EventBus()
    received: list[Event] = []

    bus.on("test.event", received.append)
    evt = Event(name="test.event", payload={"k": "v"}, source="test")
    bus.emit(evt)

    assert received == [evt]

    bus.off("test.event", received.append)
    bus.emit(evt)

    assert len(received) == 1


def test_hooks_run_in_registration_order():
    bus = EventBus()
    order: list[int] = []
    bus.on(SCHEMA_CHANGED, lambda e: order.append(1))
    bus.on(SCHEMA_CHANGED, lambda e: order.append(2))
    bus.emit(Event(name=SCHEMA_CHANGED))
    assert order == [1, 2]


def test_other_events_not_delivered():
    bus = EventBus()
    received: list[Event] = []
    bus.on("alpha", received.append)
    bus.emit(Event(name="beta"))
    assert received == []


# ---------------------------------------------------------------------------
# Wildcard hooks
# ---------------------------------------------------------------------------


def test_wildcard_hooks_receive_all_events():
    bus = EventBus()
    received: list[str] = []

    def wildcard(event: Event) -> None:
        received.append(event.name)

    bus.on_all(wildcard)
    bus.emit(Event(name="alpha"))
    bus.emit(Event(name="beta"))
    bus.off_all(wildcard)
    bus.emit(Event(name="gamma"))

    assert received == ["alpha", "beta"]


# ---------------------------------------------------------------------------
# Error isolation
# ---------------------------------------------------------------------------


def test_failing_hook_does_not_stop_others():
    bus = EventBus()
    received: list[str] = []

    def broken(event: Event) -> None:
        raise ValueError("boom")

    bus.on("x", broken)
    bus.on("x", lambda e: received.append(e.name))
    bus.emit(Event(name="x"))

    assert received == ["x"]


def test_off_unknown_hook_is_noop():
    bus = EventBus()
    bus.off("never", lambda e: None)
    bus.off_all(lambda e: None)
    assert bus.hook_count() == 0


def test_hook_count_and_clear():
    bus = EventBus()
    bus.on("a", lambda e: None)
    bus.on("b", lambda e: None)
    bus.on_all(lambda e: None)
    assert bus.hook_count("a") == 1
    assert bus.hook_count() == 3
    bus.clear()
    assert bus.hook_count() == 0


# ---------------------------------------------------------------------------
# Event model
# ---------------------------------------------------------------------------


def test_event_is_frozen():
    evt = Event(name="x")
    with pytest.raises(FrozenInstanceError):
        evt.name = "y"


def test_event_defaults():
    evt = Event(name="x")
    assert evt.payload == {}
    assert evt.source == ""
    assert evt.timestamp > 0
