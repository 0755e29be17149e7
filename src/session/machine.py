"""
Housie Live - Room Session State Machine

Lobby -> in room -> in room with a winner -> back to the Lobby (declined)
or back to an active room (``game-reset``). Local intents never change what
the client believes about the room; only engine pushes do.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, Callable

from src.realtime.channel import ChannelHandle
from src.realtime.events import Diagnostic, DiagnosticKind, InboundEvent, parse_inbound
from src.realtime.guard import SubscriptionGuard
from src.room import projections
from src.room.models import GameWon, NumberDrawn, PayloadError, Player, RoomSnapshot
from src.session.intents import IntentDispatcher, IntentRejected
from src.session.scheduler import SchedulerState, TimerFactory, WinPromptScheduler, thread_timer
from src.session.state import INITIAL_STATE, ClientSessionState, Identity, Notice, Phase

logger = logging.getLogger(__name__)

StateListener = Callable[[ClientSessionState], None]
NoticeListener = Callable[[Notice], None]

DEFAULT_PROMPT_DELAY = 5.0

UNREADABLE_UPDATE = "Received an unreadable update from the server."
CONNECTION_PROBLEM = "Cannot reach the game server."


class RoomSession:
    """Client-side state machine for one player's view of a room.

    The session owns its channel, guard and scheduler; :meth:`close` tears
    all three down together.
    """

    def __init__(
        self,
        channel: ChannelHandle,
        *,
        dispatcher: IntentDispatcher | None = None,
        prompt_delay: float = DEFAULT_PROMPT_DELAY,
        timer_factory: TimerFactory = thread_timer,
    ) -> None:
        self._channel = channel
        self._guard = SubscriptionGuard(channel)
        self._dispatcher = dispatcher or IntentDispatcher(channel)
        self._scheduler = WinPromptScheduler(prompt_delay, self._show_prompt, timer_factory)
        self._state = INITIAL_STATE
        self._version = 0
        self._lock = threading.RLock()
        self._listeners: list[StateListener] = []
        self._notice_listeners: list[NoticeListener] = []
        self._closed = False

        channel.add_diagnostic_listener(self._on_diagnostic)

    # -- Lifecycle -------------------------------------------------------

    def start(self) -> bool:
        """Bind engine handlers and connect. Calling again rebinds in place."""
        self._guard.bind_all({
            InboundEvent.ROOM_DATA: self._on_room_data,
            InboundEvent.NEW_NUMBER: self._on_new_number,
            InboundEvent.GAME_OVER: self._on_game_over,
            InboundEvent.GAME_RESET: self._on_game_reset,
            InboundEvent.ERROR: self._on_error,
        })
        return self._channel.connect()

    def reconnect(self) -> bool:
        """Try the connection again after a failed first attempt."""
        if self._channel.is_connected:
            return True
        return self._channel.connect()

    def close(self) -> None:
        """Drop handlers, cancel the prompt timer and close the channel."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._guard.dispose_all()
            self._scheduler.cancel()
        # Outside the lock: disconnect joins the transport thread
        self._channel.close()
        logger.info("Room session closed")

    def __enter__(self) -> RoomSession:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    # -- Reading ---------------------------------------------------------

    @property
    def state(self) -> ClientSessionState:
        return self._state

    @property
    def room(self) -> RoomSnapshot | None:
        return self._state.room

    @property
    def version(self) -> int:
        return self._version

    @property
    def connected(self) -> bool:
        return self._channel.is_connected

    @property
    def prompt_pending(self) -> bool:
        return self._scheduler.pending

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def add_notice_listener(self, listener: NoticeListener) -> None:
        self._notice_listeners.append(listener)

    def is_called(self, number: int) -> bool:
        return projections.is_called(self._state.room, number)

    def is_winning_number(self, number: int) -> bool:
        state = self._state
        return projections.is_winning_number(state.room, state.winner, number)

    def me(self) -> Player | None:
        state = self._state
        return projections.find_player(state.room, state.username)

    # -- Local intents ---------------------------------------------------

    def create_room(self, username: str | None) -> str:
        """Send ``create-room``; stays in the Lobby until ``room-data`` arrives.

        Returns the generated room code.
        """
        with self._lock:
            self._require_lobby()
            name, room_id = self._dispatcher.create_room(username)
            self._apply(dataclasses.replace(self._state, identity=Identity(name, room_id)))
        return room_id

    def join_room(self, username: str | None, room_id: str | None) -> None:
        """Send ``join-room``; stays in the Lobby until ``room-data`` arrives."""
        with self._lock:
            self._require_lobby()
            name, code = self._dispatcher.join_room(username, room_id)
            self._apply(dataclasses.replace(self._state, identity=Identity(name, code)))

    def draw_next(self) -> None:
        """Ask the engine to call the next number."""
        self._dispatcher.request_draw(self._state.room_id)

    def accept_replay(self) -> None:
        """Ask for a new game; local state changes when ``game-reset`` arrives."""
        with self._lock:
            self._require_prompt()
            self._dispatcher.request_reset(self._state.room_id)

    def decline_replay(self) -> None:
        """Leave the finished game and return to a fresh Lobby."""
        with self._lock:
            self._require_prompt()
            self._scheduler.cancel()
            self._apply(INITIAL_STATE)
        logger.info("Replay declined; back to the lobby")

    # -- Engine pushes ---------------------------------------------------

    def _on_room_data(self, raw: Any) -> None:
        room = self._parse(InboundEvent.ROOM_DATA, raw)
        if room is None:
            return
        with self._lock:
            state = self._state
            identity = state.identity
            if identity is not None and room.room_id and room.room_id != identity.room_id:
                identity = Identity(identity.username, room.room_id)
            self._apply(dataclasses.replace(
                state, phase=Phase.IN_ROOM, room=room, identity=identity
            ))
        logger.info("Room %s: %d players", room.room_id or "?", len(room.players))

    def _on_new_number(self, raw: Any) -> None:
        drawn = self._parse(InboundEvent.NEW_NUMBER, raw)
        if drawn is None:
            return
        with self._lock:
            state = self._state
            if not self._expect_room(InboundEvent.NEW_NUMBER, state):
                return
            self._check_history(state.room, drawn.room)
            self._apply(dataclasses.replace(
                state, last_number=drawn.number, room=drawn.room
            ))
        logger.debug("Number %d called", drawn.number)

    def _on_game_over(self, raw: Any) -> None:
        won = self._parse(InboundEvent.GAME_OVER, raw)
        if won is None:
            return
        with self._lock:
            state = self._state
            if not self._expect_room(InboundEvent.GAME_OVER, state):
                return
            self._check_history(state.room, won.room)
            self._apply(dataclasses.replace(
                state, last_number=won.number, room=won.room, winner=won.username
            ))
            self._scheduler.arm()
        logger.info("%s wins on %d", won.username, won.number)

    def _on_game_reset(self, raw: Any) -> None:
        room = self._parse(InboundEvent.GAME_RESET, raw)
        if room is None:
            return
        with self._lock:
            self._scheduler.cancel()
            state = self._state
            self._apply(dataclasses.replace(
                state,
                room=room if state.in_room else None,
                winner=None,
                last_number=None,
                prompt_armed=False,
            ))
        logger.info("Game reset")

    def _on_error(self, raw: Any) -> None:
        message = parse_inbound(InboundEvent.ERROR, raw)
        logger.warning("Engine error: %s", message)
        self._notify(Notice(message))

    def _on_diagnostic(self, diagnostic: Diagnostic) -> None:
        if diagnostic.kind is DiagnosticKind.CONNECT_ERROR:
            self._notify(Notice(CONNECTION_PROBLEM, level="warning"))
        elif diagnostic.kind is DiagnosticKind.DISCONNECTED and self._state.in_room:
            self._notify(Notice("Connection lost, waiting to reconnect...", level="warning"))

    def _show_prompt(self) -> None:
        with self._lock:
            state = self._state
            # A stale timer may fire after reset + a new win; only the current one counts
            if not state.winner or self._scheduler.state is not SchedulerState.FIRED:
                return
            self._apply(dataclasses.replace(state, prompt_armed=True))
        logger.debug("Replay prompt shown")

    # -- Internals -------------------------------------------------------

    def _parse(self, event: InboundEvent, raw: Any) -> RoomSnapshot | NumberDrawn | GameWon | None:
        try:
            return parse_inbound(event, raw)
        except PayloadError as exc:
            logger.error("%s", exc)
            self._notify(Notice(UNREADABLE_UPDATE, level="warning"))
            return None

    def _expect_room(self, event: InboundEvent, state: ClientSessionState) -> bool:
        if state.in_room:
            return True
        logger.debug("Ignoring %s outside a room", event.value)
        return False

    def _check_history(self, before: RoomSnapshot | None, after: RoomSnapshot) -> None:
        if before is not None and len(after.numbers_called) < len(before.numbers_called):
            logger.warning(
                "Draw history shrank from %d to %d without a reset",
                len(before.numbers_called),
                len(after.numbers_called),
            )

    def _require_lobby(self) -> None:
        if self._state.in_room:
            raise IntentRejected("You are already in a room.")

    def _require_prompt(self) -> None:
        if not self._state.prompt_armed:
            raise IntentRejected("There is no finished game to replay.")

    def _apply(self, new_state: ClientSessionState) -> None:
        self._state = new_state
        self._version += 1
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("Error in state listener")

    def _notify(self, notice: Notice) -> None:
        for listener in list(self._notice_listeners):
            try:
                listener(notice)
            except Exception:
                logger.exception("Error in notice listener")
