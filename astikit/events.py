"""A small thread-safe event dispatcher."""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Hashable, List, Tuple

EventHandler = Callable[[Any], bool]


class EventManager:
    """Dispatches payloads to handlers registered by event name.

    A handler returning True is removed after being called.
    """

    def __init__(self) -> None:
        self._count = 0
        self._handlers: Dict[Hashable, Dict[int, EventHandler]] = {}
        self._lock = threading.Lock()

    def on(self, name: Hashable, handler: EventHandler) -> int:
        """Register ``handler`` for ``name`` and return its id."""
        with self._lock:
            self._count += 1
            self._handlers.setdefault(name, {})[self._count] = handler
            return self._count

    def off(self, handler_id: int) -> None:
        """Remove the handler with the given id."""
        with self._lock:
            for handlers in self._handlers.values():
                handlers.pop(handler_id, None)

    def emit(self, name: Hashable, payload: Any) -> None:
        """Call the handlers of ``name`` in registration order."""
        for handler_id, handler in self._snapshot(name):
            if handler(payload):
                self.off(handler_id)

    def _snapshot(self, name: Hashable) -> List[Tuple[int, EventHandler]]:
        with self._lock:
            return sorted(self._handlers.get(name, {}).items())