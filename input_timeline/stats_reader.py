"""
Stats Reader Module
-------------------
Per-tick press statistics for the tracked buttons.
"""

from typing import Dict, Iterable, NamedTuple, Tuple

from .button_history import EventHistory


class ButtonStats(NamedTuple):
    is_pressed: bool
    pressed_elapsed: float
    pressed_count_last_second: int


EMPTY_STATS = ButtonStats(False, 0.0, 0)


class StatsReader:
    """Caches the stats of every button for the current render tick."""

    def __init__(self):
        self._cache: Dict[str, ButtonStats] = {}
        self.last_refresh: float = 0.0

    @staticmethod
    def compute(history: EventHistory, now: float) -> ButtonStats:
        return ButtonStats(
            history.is_pressed(),
            history.pressed_elapsed(now),
            history.pressed_count_last_second(now),
        )

    def refresh(self, histories: Iterable[Tuple[str, EventHistory]], now: float) -> Dict[str, ButtonStats]:
        """Recompute the stats of every button; the result replaces the previous tick's."""
        cache = {button_id: self.compute(history, now) for button_id, history in histories}
        self._cache = cache
        self.last_refresh = now
        return cache

    def get(self, button_id: str) -> ButtonStats:
        return self._cache.get(button_id, EMPTY_STATS)

    def has(self, button_id: str) -> bool:
        return button_id in self._cache

    def clear(self) -> None:
        self._cache = {}
