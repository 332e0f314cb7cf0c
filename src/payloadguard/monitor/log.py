"""
Bounded in-memory monitoring log.
"""

import threading
from collections import deque

from payloadguard.monitor.models import MonitorEntry

DEFAULT_CAPACITY = 100


class MonitorLog:
    """
    Fixed-capacity, most-recent-first record of request observations.

    New entries go to the front; once the log is full the oldest entry is
    dropped. Entries are never looked up individually, only read or cleared
    as a whole.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """
        Initialize the log.

        Args:
            capacity: Maximum number of retained entries (default 100)
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._entries: deque[MonitorEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        """Maximum number of retained entries."""
        return self._entries.maxlen or 0

    def record(self, entry: MonitorEntry) -> None:
        """Prepend an entry, evicting the oldest when over capacity."""
        with self._lock:
            # appendleft on a full bounded deque discards from the right
            self._entries.appendleft(entry)

    def read_all(self) -> list[MonitorEntry]:
        """Get all entries, most recent first."""
        with self._lock:
            return list(self._entries)

    def clear_all(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
