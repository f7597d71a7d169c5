from PyQt6.QtTest import QTest

from csv_grid.debounce import WindowDebouncer


def test_callback_runs_when_window_closes(qapp):
    calls = []
    debouncer = WindowDebouncer(lambda: calls.append(1), 50)
    assert debouncer.trigger() is True
    QTest.qWait(10)
    assert calls == []
    QTest.qWait(200)
    assert calls == [1]


def test_burst_is_coalesced(qapp):
    calls = []
    debouncer = WindowDebouncer(lambda: calls.append(1), 50)
    debouncer.trigger()
    assert debouncer.trigger() is False
    assert debouncer.trigger() is False
    QTest.qWait(300)
    assert calls == [1]


def test_burst_spread_over_event_loop_turns_runs_once(qapp):
    calls = []
    debouncer = WindowDebouncer(lambda: calls.append(1), 100)
    debouncer.trigger()
    QTest.qWait(10)
    debouncer.trigger()
    QTest.qWait(10)
    debouncer.trigger()
    QTest.qWait(400)
    assert calls == [1]


def test_trigger_after_window_starts_a_new_one(qapp):
    calls = []
    debouncer = WindowDebouncer(lambda: calls.append(1), 50)
    debouncer.trigger()
    QTest.qWait(200)
    assert debouncer.trigger() is True
    QTest.qWait(200)
    assert calls == [1, 1]


def test_cancel_drops_scheduled_run(qapp):
    calls = []
    debouncer = WindowDebouncer(lambda: calls.append(1), 50)
    debouncer.trigger()
    debouncer.cancel()
    QTest.qWait(200)
    assert calls == []
    assert not debouncer.is_active()
