"""
Purge Scheduler Module
----------------------
Periodically trims button histories to the retention window.
"""

from typing import Iterable

from .button_history import EventHistory


class PurgeScheduler:
    """Runs a purge pass once more than `interval` seconds of ticks have accumulated."""

    def __init__(self, interval: float = 0.2, retention: float = 4.5, display_seconds: float = 4.0):
        if interval <= 0:
            raise ValueError(f"Purge interval must be positive, got {interval}")
        if retention < display_seconds:
            # Segments still on screen must survive the purge.
            raise ValueError(
                f"Retention ({retention}s) must cover the visible window ({display_seconds}s)")
        self.interval = interval
        self.retention = retention
        self._accumulated: float = 0.0
        self.passes: int = 0

    def tick(self, histories: Iterable[EventHistory], now: float, elapsed: float) -> bool:
        """Advance the timer by `elapsed`; purge when the interval is exceeded."""
        if elapsed <= 0:
            return False
        self._accumulated += elapsed
        if self._accumulated <= self.interval:
            return False
        self.purge_now(histories, now)
        self._accumulated = 0.0
        return True

    def purge_now(self, histories: Iterable[EventHistory], now: float) -> int:
        removed = 0
        for history in histories:
            removed += history.purge_older_than(self.retention, now)
        self.passes += 1
        return removed
