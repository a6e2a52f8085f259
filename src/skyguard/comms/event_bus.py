"""EventBus -- pub/sub for engine events (effects, casualties, stats).

The engine publishes every cosmetic and statistical event here so display
layers can consume them without touching engine-owned entities.  Delivery
is queue-based: each subscriber owns a bounded Queue, optionally filtered to
a set of event types.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterable


class EventBus:
    """Simple thread-safe pub/sub for pushing events to subscribers."""

    def __init__(self, maxsize: int = 1000) -> None:
        self._lock = threading.Lock()
        self._maxsize = maxsize
        self._subscribers: list[tuple[queue.Queue, frozenset[str] | None]] = []

    def subscribe(self, event_types: Iterable[str] | None = None) -> queue.Queue:
        """Subscribe to events. Returns a Queue that receives matching events.

        With ``event_types`` set, only those event types are delivered.
        """
        q: queue.Queue = queue.Queue(maxsize=self._maxsize)
        wanted = frozenset(event_types) if event_types is not None else None
        with self._lock:
            self._subscribers.append((q, wanted))
        return q

    def unsubscribe(self, q: queue.Queue) -> None:
        with self._lock:
            self._subscribers = [
                (sub, wanted) for sub, wanted in self._subscribers if sub is not q
            ]

    def publish(self, event_type: str, data: dict | None = None) -> None:
        msg = {"type": event_type}
        if data is not None:
            msg["data"] = data
        with self._lock:
            for q, wanted in self._subscribers:
                if wanted is not None and event_type not in wanted:
                    continue
                try:
                    q.put_nowait(msg)
                except queue.Full:
                    # Drop oldest so stats and casualty events stay fresh
                    # when high-frequency effect events fill the queue.
                    try:
                        q.get_nowait()
                    except queue.Empty:
                        pass
                    try:
                        q.put_nowait(msg)
                    except queue.Full:
                        pass


def drain(q: queue.Queue) -> list[dict]:
    """Pull every pending message off a subscriber queue."""
    messages: list[dict] = []
    while True:
        try:
            messages.append(q.get_nowait())
        except queue.Empty:
            return messages
