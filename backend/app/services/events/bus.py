"""In-process event bus.

Each application instance owns one ``EventBus`` (kept on ``app.state``).
Listeners are registered explicitly and run synchronously, in registration
order, when an event is emitted. A failing listener is logged and skipped so
the remaining listeners and the caller are unaffected.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable

from app.core.logging import logger

Listener = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class EventContext:
    request_id: str | None
    correlation_id: str | None
    user_id: int | None


class EventBus:
    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: Listener) -> None:
        self._listeners[event_name].append(listener)

    def unsubscribe(self, event_name: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_name, [])
        if listener in listeners:
            listeners.remove(listener)

    def listeners(self, event_name: str) -> list[Listener]:
        return list(self._listeners.get(event_name, []))

    def emit(self, event_name: str, payload: dict[str, Any]) -> int:
        """Deliver ``payload`` to every listener; returns how many succeeded."""
        delivered = 0
        for listener in self.listeners(event_name):
            try:
                listener(payload)
                delivered += 1
            except Exception as e:
                logger.exception(
                    "event_listener_failed",
                    event_name=event_name,
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(e),
                )
        return delivered
