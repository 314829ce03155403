"""
Recent webhook events log.

Keeps the last N processed or failed order-paid deliveries in memory
for /debug/webhooks. Nothing is persisted; a restart empties it.
"""

from collections import deque
from typing import Optional

from config import settings
from models.webhook import WebhookEvent


class RecentEventsLog:
    """
    Bounded event log, newest first.

    Single event loop, so no locking.
    """

    def __init__(self, capacity: int = 20):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._events: deque[WebhookEvent] = deque(maxlen=capacity)

    def record(self, event: WebhookEvent) -> None:
        """Insert at the front; the oldest event drops off the back."""
        self._events.appendleft(event)

    def events(self) -> list[WebhookEvent]:
        """Snapshot, most recent first."""
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


_recent_events_log: Optional[RecentEventsLog] = None


def get_recent_events_log() -> RecentEventsLog:
    """Get or create the process-wide RecentEventsLog."""
    global _recent_events_log
    if _recent_events_log is None:
        _recent_events_log = RecentEventsLog(settings.recent_events_capacity)
    return _recent_events_log
