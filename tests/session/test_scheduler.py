"""Tests for src/session/scheduler.py — the delayed replay prompt."""

import threading

from src.session.scheduler import SchedulerState, WinPromptScheduler


class TestArm:
    def test_arm_starts_one_timer(self, timers):
        fired = []
        scheduler = WinPromptScheduler(5.0, lambda: fired.append(True), timers)

        assert scheduler.arm() is True
        assert len(timers.live) == 1
        assert timers.live[0].delay == 5.0
        assert scheduler.pending

    def test_fires_once_after_delay(self, timers):
        fired = []
        scheduler = WinPromptScheduler(5.0, lambda: fired.append(True), timers)
        scheduler.arm()
        timers.elapse()

        assert fired == [True]
        assert scheduler.state is SchedulerState.FIRED

    def test_rearm_while_pending_is_noop(self, timers):
        scheduler = WinPromptScheduler(5.0, lambda: None, timers)
        scheduler.arm()
        assert scheduler.arm() is False
        assert len(timers.created) == 1

    def test_rearm_after_firing_is_noop(self, timers):
        scheduler = WinPromptScheduler(5.0, lambda: None, timers)
        scheduler.arm()
        timers.elapse()
        assert scheduler.arm() is False
        assert len(timers.created) == 1


class TestCancel:
    def test_cancel_stops_pending_timer(self, timers):
        fired = []
        scheduler = WinPromptScheduler(5.0, lambda: fired.append(True), timers)
        scheduler.arm()
        scheduler.cancel()
        timers.elapse()

        assert fired == []
        assert timers.created[0].cancelled
        assert scheduler.state is SchedulerState.IDLE

    def test_cancel_when_idle_is_safe(self, timers):
        scheduler = WinPromptScheduler(5.0, lambda: None, timers)
        scheduler.cancel()
        scheduler.cancel()
        assert scheduler.state is SchedulerState.IDLE

    def test_stale_callback_ignored(self, timers):
        """A timer thread that was already running when cancel() hit must not fire."""
        fired = []
        scheduler = WinPromptScheduler(5.0, lambda: fired.append(True), timers)
        scheduler.arm()
        stale = timers.created[0].callback
        scheduler.cancel()
        stale()
        assert fired == []

    def test_can_arm_again_after_cancel(self, timers):
        scheduler = WinPromptScheduler(5.0, lambda: None, timers)
        scheduler.arm()
        scheduler.cancel()
        assert scheduler.arm() is True
        assert len(timers.live) == 1

    def test_callback_error_is_logged(self, timers):
        def broken():
            raise RuntimeError("boom")

        scheduler = WinPromptScheduler(5.0, broken, timers)
        scheduler.arm()
        timers.elapse()  # should not raise
        assert scheduler.state is SchedulerState.FIRED


class TestThreadTimer:
    def test_default_timer_fires(self):
        done = threading.Event()
        scheduler = WinPromptScheduler(0.01, done.set)
        scheduler.arm()
        assert done.wait(timeout=2)
        assert scheduler.state is SchedulerState.FIRED

    def test_default_timer_cancel(self):
        done = threading.Event()
        scheduler = WinPromptScheduler(0.2, done.set)
        scheduler.arm()
        scheduler.cancel()
        assert not done.wait(timeout=0.4)
