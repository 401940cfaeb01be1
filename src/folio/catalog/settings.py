"""Schema settings with explicit subscription and lifecycle.

Holds the active CatalogSchema for a host application. Instead of a
module-level mutable registry, consumers open a ``SchemaSettings``
instance, subscribe to changes, and close it when done:

    with SchemaSettings(DEFAULT_SCHEMA) as settings:
        unsubscribe = settings.subscribe(lambda schema: rebuild(schema))
        settings.update(new_schema)
        unsubscribe()
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from folio.core.events import SCHEMA_CHANGED, SETTINGS_CLOSED, SETTINGS_OPENED, Event, EventBus
from folio.core.exceptions import FolioError

from .schema import CatalogSchema

SchemaListener = Callable[[CatalogSchema], None]


class SchemaSettings:
    """The active schema plus its change listeners.

    Listeners are only notified between ``open()`` and ``close()``. Closing
    drops every subscription.
    """

    def __init__(self, schema: CatalogSchema, bus: EventBus | None = None) -> None:
        self._schema = schema
        self._bus = bus or EventBus()
        self._hooks: list = []
        self._open = False

    @property
    def schema(self) -> CatalogSchema:
        return self._schema

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> SchemaSettings:
        if not self._open:
            self._open = True
            self._bus.emit(Event(name=SETTINGS_OPENED, payload={"schema": self._schema}, source="settings"))
        return self

    def close(self) -> None:
        if not self._open:
            return
        for hook in self._hooks:
            self._bus.off(SCHEMA_CHANGED, hook)
        self._hooks.clear()
        self._open = False
        self._bus.emit(Event(name=SETTINGS_CLOSED, source="settings"))

    def __enter__(self) -> SchemaSettings:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _require_open(self) -> None:
        if not self._open:
            raise FolioError("SchemaSettings is closed; call open() first")

    def subscribe(self, listener: SchemaListener) -> Callable[[], None]:
        """Call *listener* with the new schema on every update.

        Returns:
            A callable that removes the subscription.
        """
        self._require_open()

        def hook(event: Event) -> None:
            listener(event.payload["schema"])

        self._hooks.append(hook)
        self._bus.on(SCHEMA_CHANGED, hook)

        def unsubscribe() -> None:
            self._bus.off(SCHEMA_CHANGED, hook)
            if hook in self._hooks:
                self._hooks.remove(hook)

        return unsubscribe

    def update(self, schema: CatalogSchema) -> None:
        """Replace the active schema and notify subscribers."""
        self._require_open()
        self._schema = schema
        logger.debug(f"Active schema is now '{schema.name}'")
        self._bus.emit(Event(name=SCHEMA_CHANGED, payload={"schema": schema}, source="settings"))
