"""
Housie Live - Win-Prompt Scheduler

One cancellable delayed action: after a winner is announced, wait a few
seconds, then ask the players whether to go again.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum, auto
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.name = "win-prompt"
    return timer


class SchedulerState(Enum):
    IDLE = auto()
    PENDING = auto()
    FIRED = auto()


class WinPromptScheduler:
    """Arms a single timer per winner; arming again while armed is a no-op.

    Args:
        delay: Seconds between the win and the prompt.
        on_fire: Called once on the timer thread when the delay elapses.
        timer_factory: Builds the timer; defaults to ``threading.Timer``.
    """

    def __init__(
        self,
        delay: float,
        on_fire: Callable[[], None],
        timer_factory: TimerFactory = thread_timer,
    ) -> None:
        self.delay = delay
        self._on_fire = on_fire
        self._timer_factory = timer_factory
        self._timer: TimerHandle | None = None
        self._generation = 0
        self._state = SchedulerState.IDLE
        self._lock = threading.Lock()

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is SchedulerState.PENDING

    def arm(self) -> bool:
        """Schedule the prompt unless one is already pending or shown.

        Returns True if a new timer was started.
        """
        with self._lock:
            if self._state is not SchedulerState.IDLE:
                return False
            self._generation += 1
            generation = self._generation
            self._timer = self._timer_factory(
                self.delay, lambda: self._fire(generation)
            )
            self._state = SchedulerState.PENDING
            self._timer.start()
        logger.debug("Win prompt armed (%.1fs)", self.delay)
        return True

    def cancel(self) -> None:
        """Stop any pending prompt and return to idle. Always safe."""
        with self._lock:
            timer, self._timer = self._timer, None
            was = self._state
            self._generation += 1
            self._state = SchedulerState.IDLE
        if timer is not None:
            timer.cancel()
        if was is not SchedulerState.IDLE:
            logger.debug("Win prompt cancelled (was %s)", was.name.lower())

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._state is not SchedulerState.PENDING:
                return
            self._state = SchedulerState.FIRED
            self._timer = None
        try:
            self._on_fire()
        except Exception:
            logger.exception("Error showing win prompt")
