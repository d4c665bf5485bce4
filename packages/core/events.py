"""Publish/subscribe event bus shared by the editor components.

An :class:`EventBus` is an ordinary object: the host creates one, hands it
to the components that publish or listen, and drops it (or calls
:meth:`EventBus.clear`) on teardown.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, callback: Listener) -> Callable[[], None]:
        """Subscribe *callback* to *event*; returns an unsubscribe function."""
        self._listeners.setdefault(event, []).append(callback)
        return lambda: self.off(event, callback)

    def off(self, event: str, callback: Listener) -> None:
        if event not in self._listeners:
            return
        self._listeners[event] = [cb for cb in self._listeners[event] if cb != callback]

    def once(self, event: str, callback: Listener) -> Callable[[], None]:
        """Subscribe for a single delivery."""

        def wrapper(data: Any) -> None:
            self.off(event, wrapper)
            callback(data)

        return self.on(event, wrapper)

    def emit(self, event: str, data: Any = None) -> None:
        """Deliver *data* to every subscriber of *event*, in subscription order.

        A subscriber that raises is logged and skipped; the remaining
        subscribers still receive the event.
        """
        for callback in list(self._listeners.get(event, ())):
            try:
                callback(data)
            except Exception:
                logger.exception("EventBus listener failed [%s]", event)

    def clear(self, event: str | None = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))
