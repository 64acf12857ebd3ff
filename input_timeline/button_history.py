"""
Button History Module
---------------------
Records press/release transitions for a single button over time.
"""

import threading
from typing import List, Optional

ONE_SECOND = 1.0


class Transition:
    """A state that began at start_time and lasted until end_time (if set)."""
    def __init__(self, is_pressed: bool, start_time: float,
                 end_time: Optional[float] = None, completed: bool = False):
        self.is_pressed: bool = is_pressed
        self.start_time: float = start_time
        self.end_time: Optional[float] = end_time
        self.completed: bool = completed

    def close(self, at: float) -> None:
        self.end_time = at
        self.completed = True

    def copy(self) -> "Transition":
        return Transition(self.is_pressed, self.start_time, self.end_time, self.completed)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transition):
            return NotImplemented
        return (self.is_pressed, self.start_time, self.end_time, self.completed) == \
               (other.is_pressed, other.start_time, other.end_time, other.completed)

    def __repr__(self) -> str:
        return (f"Transition(is_pressed={self.is_pressed}, start_time={self.start_time}, "
                f"end_time={self.end_time}, completed={self.completed})")


class EventHistory:
    """Ordered log of transitions for one button.

    Every public method holds the history's own lock for its full duration,
    so one producer and one consumer thread can share an instance safely.
    Only the last transition may be open (no end_time).
    """
    def __init__(self, color: str = "white", label: str = ""):
        self.color: str = color
        self.label: str = label
        self._transitions: List[Transition] = []
        self._lock = threading.Lock()

    def record_transition(self, pressed: bool, at: float) -> None:
        """Close the current transition and open a new one at `at`.

        The current transition is closed even if `pressed` matches it;
        callers decide whether the state actually changed.
        """
        with self._lock:
            if self._transitions:
                self._transitions[-1].close(at)
            self._transitions.append(Transition(pressed, at))

    def record_if_changed(self, pressed: bool, at: float) -> bool:
        """Record a transition only when `pressed` differs from the current state."""
        with self._lock:
            current = self._transitions[-1].is_pressed if self._transitions else False
            if current == pressed:
                return False
            if self._transitions:
                self._transitions[-1].close(at)
            self._transitions.append(Transition(pressed, at))
            return True

    def purge_older_than(self, retention: float, now: float) -> int:
        """Drop transitions that ended, or released states that began, before now - retention.

        An open released transition can be dropped too, leaving the history
        empty; is_pressed() then still reports False.
        """
        cutoff = now - retention
        with self._lock:
            kept = [
                t for t in self._transitions
                if not ((t.completed and t.end_time < cutoff) or
                        (not t.is_pressed and t.start_time < cutoff))
            ]
            removed = len(self._transitions) - len(kept)
            self._transitions = kept
            return removed

    def is_pressed(self) -> bool:
        with self._lock:
            if not self._transitions:
                return False
            return self._transitions[-1].is_pressed

    def pressed_elapsed(self, now: float) -> float:
        """Seconds the button has been held, or 0.0 if it is not pressed."""
        with self._lock:
            if not self._transitions:
                return 0.0
            last = self._transitions[-1]
            if not last.is_pressed:
                return 0.0
            return now - last.start_time

    def pressed_count_last_second(self, now: float) -> int:
        """Count presses that started within the last second up to `now`."""
        one_second_ago = now - ONE_SECOND
        count = 0
        with self._lock:
            for transition in reversed(self._transitions):
                if transition.start_time > now:
                    continue
                # Sorted by start_time, so everything further back is older.
                if transition.start_time < one_second_ago:
                    break
                if transition.is_pressed:
                    count += 1
        return count

    def snapshot(self) -> List[Transition]:
        """Copy of the transitions, oldest first."""
        with self._lock:
            return [t.copy() for t in self._transitions]

    def has_history(self) -> bool:
        with self._lock:
            return bool(self._transitions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._transitions)
