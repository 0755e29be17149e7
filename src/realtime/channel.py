"""
Housie Live - Channel Handle

Owns the single Socket.IO connection to the room engine. Intents go out
through ``send``; pushes come back to handlers registered with
``subscribe``. Transport problems are logged and reported to diagnostic
listeners rather than raised.

python-socketio runs its handlers on a background thread, so the handler
registry is guarded by a lock and handlers must do their own serialization.
"""

from __future__ import annotations

import itertools
import logging
import threading
from enum import Enum
from typing import Any, Callable

import socketio
from socketio import exceptions as sio_exceptions

from src.realtime.events import TRANSPORT_EVENTS, Diagnostic, DiagnosticKind

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]
DiagnosticListener = Callable[[Diagnostic], None]


class ChannelClosedError(RuntimeError):
    """Raised when a closed channel is asked to send or subscribe."""


class Subscription:
    """Token returned by :meth:`ChannelHandle.subscribe`."""

    def __init__(self, channel: ChannelHandle, event: str, token: int) -> None:
        self._channel = channel
        self.event = event
        self._token = token
        self._active = True

    @property
    def active(self) -> bool:
        return self._active and self._channel._has_token(self.event, self._token)

    def cancel(self) -> None:
        """Detach the handler. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self._channel._remove(self.event, self._token)

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"<Subscription {self.event!r} #{self._token} {state}>"


class ChannelHandle:
    """One long-lived connection to the room engine.

    Args:
        url: Room engine base URL.
        socketio_path: Socket.IO endpoint path on the server.
        connect_timeout: Seconds to wait for the namespace handshake.
        reconnection: Let the transport reconnect on its own after a drop.
        client: Pre-built ``socketio.Client`` (tests inject a mock).
    """

    def __init__(
        self,
        url: str,
        *,
        socketio_path: str = "socket.io",
        connect_timeout: float = 5.0,
        reconnection: bool = True,
        client: socketio.Client | None = None,
    ) -> None:
        self.url = url
        self._socketio_path = socketio_path
        self._connect_timeout = connect_timeout
        self._reconnection = reconnection
        self._client = client or socketio.Client(
            reconnection=reconnection, logger=False, engineio_logger=False
        )
        self._handlers: dict[str, dict[int, Handler]] = {}
        self._diagnostic_listeners: list[DiagnosticListener] = []
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()
        self._closed = False

        for name, kind in TRANSPORT_EVENTS.items():
            self._client.on(name, self._transport_callback(kind))

    # -- Connection ------------------------------------------------------

    def connect(self) -> bool:
        """Open the connection. Returns False (never raises) on failure.

        The first attempt is made once, without retrying, so the caller is
        never held up by an unreachable server; the transport's own
        reconnection only takes over after a connection has been made.
        """
        self._ensure_open("connect")
        if self._client.connected:
            return True
        try:
            self._client.connect(
                self.url,
                socketio_path=self._socketio_path,
                wait_timeout=self._connect_timeout,
                retry=False,
            )
        except sio_exceptions.ConnectionError as exc:
            logger.warning("Could not connect to %s: %s", self.url, exc)
            self._notify(Diagnostic(DiagnosticKind.CONNECT_ERROR, str(exc)))
            return False
        logger.info("Connected to room engine at %s", self.url)
        return True

    @property
    def is_connected(self) -> bool:
        return not self._closed and bool(self._client.connected)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the transport and invalidate every subscription."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            dropped = sum(len(h) for h in self._handlers.values())
            self._handlers.clear()
            self._diagnostic_listeners.clear()
        try:
            self._client.disconnect()
        except sio_exceptions.SocketIOError:
            logger.exception("Error disconnecting from %s", self.url)
        logger.info("Channel closed (%d handlers dropped)", dropped)

    # -- Outbound --------------------------------------------------------

    def send(self, intent: Enum | str, payload: Any) -> bool:
        """Emit an intent. Fire-and-forget; False if the transport is down."""
        self._ensure_open("send")
        name = intent.value if isinstance(intent, Enum) else intent
        if not self._client.connected:
            logger.warning("Dropped %s: not connected to %s", name, self.url)
            return False
        try:
            self._client.emit(name, payload)
        except sio_exceptions.SocketIOError as exc:
            logger.warning("Failed to send %s: %s", name, exc)
            return False
        logger.debug("Sent %s %r", name, payload)
        return True

    # -- Inbound ---------------------------------------------------------

    def subscribe(self, event: Enum | str, handler: Handler) -> Subscription:
        """Register *handler* for a named push."""
        name = event.value if isinstance(event, Enum) else event
        with self._lock:
            self._ensure_open("subscribe")
            if name not in self._handlers:
                self._handlers[name] = {}
                self._client.on(name, self._event_callback(name))
            token = next(self._tokens)
            self._handlers[name][token] = handler
        logger.debug("Subscribed to %s (#%d)", name, token)
        return Subscription(self, name, token)

    def add_diagnostic_listener(self, listener: DiagnosticListener) -> None:
        self._ensure_open("add_diagnostic_listener")
        with self._lock:
            self._diagnostic_listeners.append(listener)

    @property
    def active_subscriptions(self) -> dict[str, int]:
        """Number of live handlers per event name."""
        with self._lock:
            return {name: len(h) for name, h in self._handlers.items() if h}

    # -- Internals -------------------------------------------------------

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise ChannelClosedError(f"Cannot {operation}: channel is closed.")

    def _has_token(self, event: str, token: int) -> bool:
        with self._lock:
            return token in self._handlers.get(event, {})

    def _remove(self, event: str, token: int) -> None:
        with self._lock:
            handlers = self._handlers.get(event)
            if handlers is not None:
                handlers.pop(token, None)
        logger.debug("Unsubscribed from %s (#%d)", event, token)

    def _event_callback(self, event: str) -> Callable[..., None]:
        def callback(*args: Any) -> None:
            self._dispatch(event, args[0] if args else None)
        return callback

    def _transport_callback(self, kind: DiagnosticKind) -> Callable[..., None]:
        def callback(*args: Any) -> None:
            detail = str(args[0]) if args and args[0] is not None else ""
            if kind is DiagnosticKind.CONNECT_ERROR:
                logger.warning("Connection error: %s", detail or "unknown")
            else:
                logger.info("Transport %s %s", kind.name.lower(), detail)
            self._notify(Diagnostic(kind, detail))
        return callback

    def _dispatch(self, event: str, payload: Any) -> None:
        with self._lock:
            handlers = list(self._handlers.get(event, {}).values())
        if not handlers:
            logger.debug("No handler for %s", event)
            return
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception("Error handling %s", event)

    def _notify(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            listeners = list(self._diagnostic_listeners)
        for listener in listeners:
            try:
                listener(diagnostic)
            except Exception:
                logger.exception("Error in diagnostic listener")
