"""
History Registry Module
-----------------------
Maps button ids to their event histories and drives per-tick work.
"""

import time
from typing import Dict, Iterable, List, Optional, Tuple

from .button_history import EventHistory
from .config_manager import ButtonMapping
from .purge_scheduler import PurgeScheduler
from .stats_reader import ButtonStats, StatsReader, EMPTY_STATS
from .timeline_builder import Segment, build


class HistoryRegistry:
    """Owns one EventHistory per tracked button.

    The id -> history dict is never mutated after creation; reset() swaps in
    a new one. Each call reads the current dict once, so no registry-wide
    lock is needed and buttons never contend with each other.
    """
    def __init__(self, button_ids: Iterable[str] = (),
                 mappings: Optional[Dict[str, ButtonMapping]] = None,
                 purge_scheduler: Optional[PurgeScheduler] = None):
        self._histories: Dict[str, EventHistory] = {}
        self._purge_scheduler = purge_scheduler or PurgeScheduler()
        self._stats_reader = StatsReader()
        # The dict the cached stats were computed from
        self._ticked_histories: Optional[Dict[str, EventHistory]] = None
        self.reset(button_ids, mappings)

    def reset(self, button_ids: Iterable[str],
              mappings: Optional[Dict[str, ButtonMapping]] = None) -> None:
        """Drop every history and start tracking `button_ids`, each empty."""
        mappings = mappings or {}
        histories: Dict[str, EventHistory] = {}
        for button_id in button_ids:
            mapping = mappings.get(button_id)
            if mapping is not None:
                histories[button_id] = EventHistory(color=mapping.color, label=mapping.label)
            else:
                histories[button_id] = EventHistory(label=button_id[:1])
        self._histories = histories
        self._stats_reader.clear()
        print(f"[Registry] Tracking {len(histories)} buttons: {', '.join(histories) or '-'}")

    def reset_from_mappings(self, mappings: Iterable[ButtonMapping]) -> None:
        """Track the visible mappings in display order."""
        visible = sorted((m for m in mappings if m.visible), key=lambda m: m.order)
        self.reset([m.button for m in visible], {m.button: m for m in visible})

    def update(self, button_id: str, pressed: bool, at: float) -> bool:
        """Record a new state for a button. Unknown ids and unchanged states are ignored."""
        history = self._histories.get(button_id)
        if history is None:
            return False
        return history.record_if_changed(pressed, at)

    def tick(self, now: float, elapsed: float) -> bool:
        """Run the purge timer and refresh this tick's stats. Returns True if a purge ran."""
        histories = self._histories
        purged = self._purge_scheduler.tick(histories.values(), now, elapsed)
        self._stats_reader.refresh(histories.items(), now)
        self._ticked_histories = histories
        return purged

    def stats_for(self, button_id: str, now: Optional[float] = None) -> ButtonStats:
        """Stats from the last tick.

        When no tick has run over the current button set (before the first
        tick, or after a reset), the stats are computed directly at `now`,
        which defaults to time.monotonic().
        """
        histories = self._histories
        history = histories.get(button_id)
        if history is None:
            return EMPTY_STATS
        if self._ticked_histories is not histories:
            return StatsReader.compute(history, time.monotonic() if now is None else now)
        return self._stats_reader.get(button_id)

    def timeline_for(self, button_id: str, window: Tuple[float, float],
                     px_per_ms: float, max_px: int) -> List[Segment]:
        history = self._histories.get(button_id)
        if history is None:
            return []
        window_start, window_end = window
        return build(history.snapshot(), window_start, window_end, px_per_ms, max_px)

    def history(self, button_id: str) -> Optional[EventHistory]:
        return self._histories.get(button_id)

    def button_ids(self) -> List[str]:
        return list(self._histories)

    def items(self) -> List[Tuple[str, EventHistory]]:
        return list(self._histories.items())

    @property
    def purge_scheduler(self) -> PurgeScheduler:
        return self._purge_scheduler

    def __contains__(self, button_id: str) -> bool:
        return button_id in self._histories

    def __len__(self) -> int:
        return len(self._histories)
