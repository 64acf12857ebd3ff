import pytest

from input_timeline.button_history import EventHistory


@pytest.fixture
def history():
    return EventHistory(color="gold", label="B")


@pytest.fixture
def round_trip_history():
    """Pressed 0.0-0.5, released 0.5-0.8, pressed from 0.8 onward."""
    h = EventHistory()
    h.record_transition(True, 0.0)
    h.record_transition(False, 0.5)
    h.record_transition(True, 0.8)
    return h
