import logging

import pytest

from signalkit import ObserverFailure, Signal, signal


class RaisingSettings:
    observer_errors = "raise"


class LoggingSettings:
    observer_errors = "log"


class Spy:
    def __init__(self):
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)


def test_update_stores_and_notifies_once():
    s = signal(1)
    spy = Spy()
    s.on_change(spy)

    s.update(2)

    assert s.get() == 2
    assert spy.calls == [2]


def test_update_with_same_value_does_not_notify():
    s = signal(1)
    spy = Spy()
    s.on_change(spy)

    s.update(1)

    assert s.get() == 1
    assert spy.calls == []


def test_structurally_equal_list_is_a_change():
    first = [1, 2]
    second = [1, 2]
    s = signal(first)
    spy = Spy()
    s.on_change(spy)

    s.update(second)
    s.update(second)

    assert s.get() is second
    assert spy.calls == [second]


def test_unsubscribe_stops_notifications_and_is_idempotent():
    s = signal(0)
    spy = Spy()
    other = Spy()
    stop = s.on_change(spy)
    s.on_change(other)

    stop()
    stop()
    s.update(1)

    assert spy.calls == []
    assert other.calls == [1]


def test_same_handler_registered_twice_is_removed_once_per_unsubscribe():
    s = signal(0)
    spy = Spy()
    stop_first = s.on_change(spy)
    s.on_change(spy)

    stop_first()
    s.update(1)

    assert spy.calls == [1]


def test_observers_run_in_registration_order():
    s = signal("a")
    order = []
    s.on_change(lambda value: order.append("cb1"))
    s.on_change(lambda value: order.append("cb2"))

    s.update("b")

    assert order == ["cb1", "cb2"]


def test_subscribe_calls_handler_immediately():
    s = signal(1)
    spy = Spy()

    stop = s.subscribe(spy)
    assert spy.calls == [1]

    s.update(2)
    s.update(3)
    assert spy.calls == [1, 2, 3]

    stop()
    s.update(4)
    assert spy.calls == [1, 2, 3]


def test_change_sequence_end_to_end():
    s = signal(1)
    spy = Spy()
    stop = s.on_change(spy)

    s.update(2)
    assert spy.calls == [2]

    s.update(2)
    assert spy.calls == [2]

    s.update(3)
    assert spy.calls == [2, 3]

    stop()
    s.update(4)
    assert spy.calls == [2, 3]
    assert s.get() == 4


def test_map_follows_source():
    s = signal(1)
    t = s.map(lambda x: x + 1)
    spy = Spy()
    t.on_change(spy)

    assert t.get() == 2

    s.update(2)
    assert t.get() == 3
    assert spy.calls == [3]

    s.update(3)
    assert spy.calls == [3, 4]


def test_mapped_signal_can_be_mapped_again():
    s = signal(2)
    doubled = s.map(lambda x: x * 2)
    label = doubled.map(lambda x: f"value={x}")

    s.update(5)

    assert label.get() == "value=10"


def test_map_skips_notification_when_derived_value_is_unchanged():
    s = signal(1)
    parity = s.map(lambda x: x % 2)
    spy = Spy()
    parity.on_change(spy)

    s.update(3)
    s.update(4)

    assert spy.calls == [0]


def test_detach_stops_following_source():
    s = signal(1)
    t = s.map(lambda x: x * 10)

    t.detach()
    t.detach()
    s.update(2)

    assert t.get() == 10


def test_detach_on_plain_signal_is_a_no_op():
    s = signal(1)
    s.detach()
    s.update(2)
    assert s.get() == 2


def test_unsubscribe_all_removes_every_observer():
    s = signal(1)
    spy = Spy()
    s.on_change(spy)
    t = s.map(lambda x: x + 1)

    s.unsubscribe_all()
    s.update(5)

    assert spy.calls == []
    assert t.get() == 2


def test_observer_added_during_delivery_is_not_called_in_that_cycle():
    s = signal(0)
    late = Spy()

    def adder(value):
        s.on_change(late)

    s.on_change(adder)
    s.update(1)
    assert late.calls == []

    s.update(2)
    assert late.calls == [2]


def test_observer_removed_by_earlier_observer_is_skipped():
    s = signal(0)
    victim = Spy()
    stops = {}

    s.on_change(lambda value: stops["victim"]())
    stops["victim"] = s.on_change(victim)

    s.update(1)

    assert victim.calls == []


def test_reentrant_update_runs_nested_delivery_first():
    s = signal(0)
    seen = []

    def bump(value):
        seen.append(("bump", value))
        if value == 1:
            s.update(2)

    s.on_change(bump)
    s.on_change(lambda value: seen.append(("tail", value)))

    s.update(1)

    assert seen == [("bump", 1), ("bump", 2), ("tail", 2), ("tail", 1)]
    assert s.get() == 2


def test_failing_observer_raises_after_all_observers_ran():
    s = Signal(0, project_settings=RaisingSettings())
    spy = Spy()
    error = ValueError("bad observer")

    def failing(value):
        raise error

    s.on_change(failing)
    s.on_change(spy)

    with pytest.raises(ObserverFailure) as excinfo:
        s.update(1)

    assert spy.calls == [1]
    assert excinfo.value.failures == [error]
    assert excinfo.value.__cause__ is error
    assert s.get() == 1


def test_failing_observer_is_logged_under_log_policy(caplog):
    s = Signal(0, project_settings=LoggingSettings())
    spy = Spy()

    def failing(value):
        raise ValueError("bad observer")

    s.on_change(failing)
    s.on_change(spy)

    with caplog.at_level(logging.ERROR, logger="signalkit.core.signal"):
        s.update(1)

    assert spy.calls == [1]
    assert "Observer of Signal(1) failed" in caplog.text
    assert "bad observer" in caplog.text


def test_mapped_signal_uses_source_settings():
    project_settings = LoggingSettings()
    s = Signal(1, project_settings=project_settings)
    assert s.map(str).settings is project_settings


def test_custom_equality_callable():
    s = signal(1.0, equality=lambda old, new: abs(old - new) < 0.5)
    spy = Spy()
    s.on_change(spy)

    s.update(1.2)
    s.update(2.0)

    assert spy.calls == [2.0]
    assert s.get() == 2.0


def test_repr_shows_value():
    assert repr(signal([1])) == "Signal([1])"


def test_subscribe_handler_that_raises_is_not_registered():
    s = signal(1)
    calls = []

    def failing(value):
        calls.append(value)
        raise RuntimeError("cannot take initial value")

    with pytest.raises(RuntimeError):
        s.subscribe(failing)

    s.update(2)

    assert calls == [1]
