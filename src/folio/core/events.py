"""Event bus for loose-coupled extensibility.

Provides a lightweight publish/subscribe system that lets components
communicate without direct dependencies. Hooks are plain callables run
synchronously, in registration order.

Usage::

    from folio.core.events import EventBus, Event, SCHEMA_CHANGED

    bus = EventBus()

    def on_schema(event: Event) -> None:
        print(f"Schema changed: {event.payload['schema'].name}")

    bus.on(SCHEMA_CHANGED, on_schema)
    bus.emit(Event(name=SCHEMA_CHANGED, payload={"schema": schema}, source="settings"))
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any

from loguru import logger

# ---------------------------------------------------------------------------
# Well-known event names
# ---------------------------------------------------------------------------

SCHEMA_CHANGED = "schema.changed"
SETTINGS_OPENED = "settings.opened"
SETTINGS_CLOSED = "settings.closed"

Hook = Callable[["Event"], None]


# ---------------------------------------------------------------------------
# Event model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Event:
    """An immutable event that flows through the bus."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time)
    source: str = ""


# ---------------------------------------------------------------------------
# EventBus
# ---------------------------------------------------------------------------


class EventBus:
    """Simple synchronous pub/sub event bus."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[Hook]] = defaultdict(list)
        self._wildcard_hooks: list[Hook] = []

    def on(self, event_name: str, hook: Hook) -> None:
        """Register *hook* for a specific event name."""
        self._hooks[event_name].append(hook)

    def on_all(self, hook: Hook) -> None:
        """Register *hook* for all events (wildcard)."""
        self._wildcard_hooks.append(hook)

    def off(self, event_name: str, hook: Hook) -> None:
        """Unregister *hook* from a specific event name."""
        try:
            self._hooks[event_name].remove(hook)
        except ValueError:
            pass

    def off_all(self, hook: Hook) -> None:
        """Unregister a wildcard *hook*."""
        try:
            self._wildcard_hooks.remove(hook)
        except ValueError:
            pass

    def clear(self) -> None:
        """Drop every registered hook."""
        self._hooks.clear()
        self._wildcard_hooks.clear()

    def hook_count(self, event_name: str | None = None) -> int:
        """Number of hooks for *event_name*, or of all hooks when None."""
        if event_name is None:
            return sum(len(hooks) for hooks in self._hooks.values()) + len(self._wildcard_hooks)
        return len(self._hooks.get(event_name, []))

    def emit(self, event: Event) -> None:
        """Emit an event, running all matching hooks.

        A failing hook is logged and does not stop the others.
        """
        hooks = list(self._hooks.get(event.name, []))
        hooks.extend(self._wildcard_hooks)
        for hook in hooks:
            try:
                hook(event)
            except Exception as exc:
                logger.warning(f"Event hook failed for {event.name}: {exc}")
