import threading

import pytest

from input_timeline.button_history import EventHistory, Transition


def record_presses(history, press_times, hold=0.005):
    for at in press_times:
        history.record_transition(True, at)
        history.record_transition(False, at + hold)


def test_empty_history_queries():
    h = EventHistory()
    assert h.is_pressed() is False
    assert h.pressed_elapsed(10.0) == 0.0
    assert h.pressed_count_last_second(10.0) == 0
    assert h.snapshot() == []
    assert not h.has_history()


def test_record_closes_previous_transition(history):
    history.record_transition(True, 1.0)
    history.record_transition(False, 1.5)

    assert history.snapshot() == [
        Transition(True, 1.0, 1.5, True),
        Transition(False, 1.5, None, False),
    ]


def test_record_closes_even_when_state_repeats(history):
    history.record_transition(True, 1.0)
    history.record_transition(True, 2.0)

    transitions = history.snapshot()
    assert len(transitions) == 2
    assert transitions[0].completed and transitions[0].end_time == 2.0
    assert transitions[1].is_pressed and not transitions[1].completed


def test_start_times_sorted_and_only_last_open(history):
    for i in range(20):
        history.record_transition(i % 3 == 0, i * 0.25)

    transitions = history.snapshot()
    starts = [t.start_time for t in transitions]
    assert starts == sorted(starts)
    assert all(t.completed for t in transitions[:-1])
    assert all(t.end_time >= t.start_time for t in transitions[:-1])
    assert not transitions[-1].completed
    assert transitions[-1].end_time is None


def test_record_if_changed_skips_unchanged_state(history):
    assert history.record_if_changed(False, 1.0) is False
    assert len(history) == 0

    assert history.record_if_changed(True, 1.0) is True
    assert history.record_if_changed(True, 1.2) is False
    assert history.record_if_changed(False, 1.4) is True
    assert len(history) == 2
    assert history.snapshot()[0].end_time == 1.4


def test_pressed_elapsed(history):
    history.record_transition(True, 10.0)
    assert history.pressed_elapsed(10.5) == pytest.approx(0.5)
    assert history.is_pressed()

    history.record_transition(False, 10.5)
    assert history.pressed_elapsed(10.5) == 0.0
    assert history.pressed_elapsed(99.0) == 0.0
    assert not history.is_pressed()


def test_pressed_count_last_second(history):
    record_presses(history, [0.0, 0.1, 0.2, 0.9, 1.1])

    # Cutoff is exactly 0.0, so the press at 0.0 counts; the one at 1.1 is still ahead.
    assert history.pressed_count_last_second(1.0) == 4
    assert history.pressed_count_last_second(1.15) == 3
    # The press at 0.2 sits on the inclusive cutoff.
    assert history.pressed_count_last_second(1.2) == 3
    assert history.pressed_count_last_second(1.25) == 2
    assert history.pressed_count_last_second(1.95) == 1
    assert history.pressed_count_last_second(3.0) == 0


def test_pressed_count_ignores_presses_after_now(history):
    record_presses(history, [0.5, 2.0, 2.2])

    assert history.pressed_count_last_second(1.0) == 1
    assert history.pressed_count_last_second(0.4) == 0


def test_pressed_count_stops_at_first_old_transition(history):
    history.record_transition(True, 1.5)
    # Out of order on purpose: the scan stops here and never sees the press at 1.5.
    history.record_transition(False, 0.1)
    history.record_transition(True, 1.8)

    assert history.pressed_count_last_second(2.0) == 1


def test_purge_keeps_transition_ending_exactly_at_cutoff(history):
    history.record_transition(True, 0.0)
    history.record_transition(False, 1.0)

    assert history.purge_older_than(4.0, 5.0) == 0
    assert len(history) == 2


def test_purge_removes_completed_and_old_released(history):
    history.record_transition(True, 0.0)
    history.record_transition(False, 1.0)
    history.record_transition(True, 3.0)
    history.record_transition(False, 3.5)

    assert history.purge_older_than(4.0, 6.0) == 2
    assert history.snapshot() == [
        Transition(True, 3.0, 3.5, True),
        Transition(False, 3.5, None, False),
    ]


def test_purge_can_drop_open_released_transition(history):
    history.record_transition(True, 0.0)
    history.record_transition(False, 1.0)

    history.purge_older_than(4.0, 5.5)

    assert len(history) == 0
    assert history.is_pressed() is False
    assert history.pressed_elapsed(5.5) == 0.0


def test_purge_keeps_long_open_press(history):
    history.record_transition(True, 0.0)

    assert history.purge_older_than(4.0, 100.0) == 0
    assert history.is_pressed()
    assert history.pressed_elapsed(100.0) == pytest.approx(100.0)


def test_snapshot_is_detached(history):
    history.record_transition(True, 1.0)
    snapshot = history.snapshot()
    history.record_transition(False, 2.0)

    assert snapshot[0].end_time is None
    assert not snapshot[0].completed


def test_concurrent_writer_and_reader_keep_invariants():
    h = EventHistory()
    errors = []
    done = threading.Event()

    def writer():
        for i in range(2000):
            h.record_transition(i % 2 == 0, i * 0.001)
        done.set()

    def reader():
        try:
            while not done.is_set():
                h.is_pressed()
                h.pressed_elapsed(2.0)
                h.pressed_count_last_second(2.0)
                h.purge_older_than(0.5, 2.0)
                transitions = h.snapshot()
                if transitions:
                    assert all(t.completed for t in transitions[:-1])
        except AssertionError as e:
            errors.append(e)

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert not errors
    transitions = h.snapshot()
    starts = [t.start_time for t in transitions]
    assert starts == sorted(starts)
    assert not transitions[-1].completed
