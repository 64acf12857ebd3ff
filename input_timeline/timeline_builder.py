"""
Timeline Builder Module
-----------------------
Projects a button's transition history onto a row of timeline pixels.
"""

from typing import List, NamedTuple, Sequence

from .button_history import EventHistory, Transition


class Segment(NamedTuple):
    """A filled (pressed) span of a row, measured from the row's newest edge."""
    offset_px: int
    width_px: int


def build(transitions: Sequence[Transition], window_start: float, window_end: float,
          px_per_ms: float, max_px: int) -> List[Segment]:
    """Build the pressed segments for one row.

    Walks the transitions newest to oldest and stops as soon as a transition
    ends before the window or the row has used up `max_px` pixels. Released
    spans move the cursor without producing a segment. Any transition with a
    positive visible duration takes at least one pixel; a press with none
    produces no segment.
    """
    segments: List[Segment] = []
    x = 0
    used_px = 0

    for transition in reversed(transitions):
        end_time = transition.end_time if transition.completed else window_end
        if end_time < window_start or used_px >= max_px:
            break

        start_time = max(transition.start_time, window_start)
        length_ms = (end_time - start_time) * 1000.0
        length_px = max(0, int(round(length_ms * px_per_ms)))
        if length_ms > 0 and length_px < 1:
            length_px = 1

        used_px += length_px

        if not transition.is_pressed or length_px == 0:
            x += length_px
            continue

        segments.append(Segment(x, length_px))
        x += length_px

    return segments


class TimelineBuilder:
    """Row geometry (scale and pixel budget) shared by every button row."""

    def __init__(self, px_per_ms: float = 0.05, max_px: int = 200):
        if px_per_ms <= 0:
            raise ValueError(f"px_per_ms must be positive, got {px_per_ms}")
        if max_px <= 0:
            raise ValueError(f"max_px must be positive, got {max_px}")
        self.px_per_ms = px_per_ms
        self.max_px = max_px

    def build_for(self, history: EventHistory, window_start: float,
                  window_end: float) -> List[Segment]:
        # Geometry runs on a copy so the history lock is not held meanwhile.
        transitions = history.snapshot()
        return build(transitions, window_start, window_end, self.px_per_ms, self.max_px)
