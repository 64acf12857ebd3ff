import pytest

from input_timeline.button_history import EventHistory
from input_timeline.stats_reader import ButtonStats, StatsReader, EMPTY_STATS


def test_compute_reads_all_three_queries(round_trip_history):
    stats = StatsReader.compute(round_trip_history, 1.0)

    assert stats.is_pressed is True
    assert stats.pressed_elapsed == pytest.approx(0.2)
    # Presses at 0.0 and 0.8 both started within the last second.
    assert stats.pressed_count_last_second == 2


def test_unknown_button_gets_empty_stats():
    reader = StatsReader()
    assert reader.get("A") == EMPTY_STATS
    assert reader.get("A") == ButtonStats(False, 0.0, 0)


def test_cached_until_next_refresh():
    reader = StatsReader()
    h = EventHistory()
    reader.refresh([("A", h)], 1.0)
    assert reader.get("A").is_pressed is False

    h.record_transition(True, 1.5)
    assert reader.get("A").is_pressed is False

    reader.refresh([("A", h)], 2.0)
    assert reader.get("A") == ButtonStats(True, pytest.approx(0.5), 1)
    assert reader.last_refresh == 2.0


def test_refresh_drops_buttons_no_longer_given():
    reader = StatsReader()
    reader.refresh([("A", EventHistory()), ("B", EventHistory())], 1.0)
    reader.refresh([("B", EventHistory())], 2.0)

    assert not reader.has("A")
    assert reader.has("B")
