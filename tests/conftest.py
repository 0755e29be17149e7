"""
Housie Live - Test Configuration and Fixtures

Common fixtures and test data for all test modules. The Socket.IO client and
the prompt timer are replaced with in-memory fakes so nothing touches the
network or sleeps.
"""

from typing import Any, Callable

import pytest

from src.realtime.channel import ChannelHandle
from src.session.intents import IntentDispatcher
from src.session.machine import RoomSession


# =============================================================================
# ROOM TEST DATA
# =============================================================================

ALICE_TICKET = (3, 11, 24, 38, 42, 50, 57, 61, 66, 70, 74, 79, 83, 88, 90)
BOB_TICKET = (5, 14, 19, 27, 33, 42, 48, 52, 59, 63, 68, 71, 77, 85, 89)


def player_data(username: str, ticket: tuple[int, ...], called: list[int]) -> dict[str, Any]:
    """A player as the engine sends it, marks derived from the called numbers."""
    return {
        "username": username,
        "ticket": list(ticket),
        "marks": [n for n in ticket if n in called],
    }


def room_data(
    room_id: str = "AB12CD",
    called: list[int] | None = None,
    players: tuple[str, ...] = ("alice",),
) -> dict[str, Any]:
    """A full room snapshot in wire shape."""
    called = called or []
    tickets = {"alice": ALICE_TICKET, "bob": BOB_TICKET}
    return {
        "roomId": room_id,
        "players": [player_data(name, tickets[name], called) for name in players],
        "numbersCalled": list(called),
    }


@pytest.fixture
def make_room() -> Callable[..., dict[str, Any]]:
    return room_data


# =============================================================================
# TRANSPORT FAKES
# =============================================================================

class FakeSocketClient:
    """Stands in for ``socketio.Client``: records handlers and emits."""

    def __init__(self, connect_error: Exception | None = None) -> None:
        self.handlers: dict[str, Callable[..., None]] = {}
        self.emitted: list[tuple[str, Any]] = []
        self.connected = False
        self.connect_calls: list[tuple[str, dict[str, Any]]] = []
        self.disconnect_calls = 0
        self._connect_error = connect_error

    def on(self, event: str, handler: Callable[..., None]) -> None:
        self.handlers[event] = handler

    def connect(self, url: str, **kwargs: Any) -> None:
        self.connect_calls.append((url, kwargs))
        if self._connect_error is not None:
            raise self._connect_error
        self.connected = True
        self.fire("connect")

    def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connected = False

    def emit(self, event: str, data: Any = None) -> None:
        self.emitted.append((event, data))

    def fire(self, event: str, *args: Any) -> None:
        """Deliver an event the way python-socketio would."""
        handler = self.handlers.get(event)
        if handler is not None:
            handler(*args)


class FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Simulate the delay elapsing (a cancelled timer never runs)."""
        if self.started and not self.cancelled:
            self.callback()


class FakeTimers:
    """Timer factory that hands out FakeTimer objects for tests to fire."""

    def __init__(self) -> None:
        self.created: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.created.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [t for t in self.created if t.started and not t.cancelled]

    def elapse(self) -> None:
        """Fire every timer that is still pending."""
        for timer in list(self.live):
            timer.fire()


@pytest.fixture
def sio() -> FakeSocketClient:
    return FakeSocketClient()


@pytest.fixture
def channel(sio: FakeSocketClient) -> ChannelHandle:
    ch = ChannelHandle("http://housie.test", client=sio)
    yield ch
    ch.close()


@pytest.fixture
def timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def session(channel: ChannelHandle, timers: FakeTimers) -> RoomSession:
    """A started session whose room codes are always AB12CD."""
    dispatcher = IntentDispatcher(channel, code_factory=lambda: "AB12CD")
    s = RoomSession(channel, dispatcher=dispatcher, prompt_delay=5.0, timer_factory=timers)
    s.start()
    yield s
    s.close()


@pytest.fixture
def make_sio() -> Callable[..., FakeSocketClient]:
    return FakeSocketClient
