"""
Tests for deferred tasks.
"""
import pytest
from unittest.mock import Mock

from src.utils.timers import Debouncer, TaskScheduler

def test_task_runs_only_when_due(clock):
    scheduler = TaskScheduler(clock=clock)
    callback = Mock()
    scheduler.call_later(1.5, callback)

    clock.advance(1.0)
    assert scheduler.run_due() == 0
    callback.assert_not_called()

    clock.advance(0.5)
    assert scheduler.run_due() == 1
    callback.assert_called_once()
    assert scheduler.pending == 0

def test_tasks_run_in_due_order(clock):
    scheduler = TaskScheduler(clock=clock)
    calls = []
    scheduler.call_later(2, lambda: calls.append("second"))
    scheduler.call_later(1, lambda: calls.append("first"))
    scheduler.call_later(1, lambda: calls.append("first-again"))

    scheduler.run_due(now=clock.now + 5)
    assert calls == ["first", "first-again", "second"]

def test_cancelled_task_does_not_run(clock):
    scheduler = TaskScheduler(clock=clock)
    callback = Mock()
    task = scheduler.call_later(1, callback)
    task.cancel()

    clock.advance(2)
    assert scheduler.run_due() == 0
    callback.assert_not_called()

def test_cancel_all_on_teardown(clock):
    scheduler = TaskScheduler(clock=clock)
    callback = Mock()
    first = scheduler.call_later(1, callback)
    scheduler.call_later(2, callback)
    assert scheduler.pending == 2

    scheduler.cancel_all()
    assert scheduler.pending == 0
    assert first.cancelled
    clock.advance(5)
    assert scheduler.run_due() == 0

def test_negative_delay_rejected(clock):
    with pytest.raises(ValueError):
        TaskScheduler(clock=clock).call_later(-1, Mock())

def test_debouncer_coalesces_triggers(clock):
    scheduler = TaskScheduler(clock=clock)
    callback = Mock()
    debouncer = Debouncer(scheduler, 0.12, callback)

    debouncer.trigger()
    clock.advance(0.1)
    debouncer.trigger()
    clock.advance(0.1)
    scheduler.run_due()
    callback.assert_not_called()

    clock.advance(0.05)
    scheduler.run_due()
    callback.assert_called_once()

def test_debouncer_cancel(clock):
    scheduler = TaskScheduler(clock=clock)
    callback = Mock()
    debouncer = Debouncer(scheduler, 0.12, callback)
    debouncer.trigger()
    debouncer.cancel()

    clock.advance(1)
    scheduler.run_due()
    callback.assert_not_called()
