"""
Housie Live - Realtime Event Definitions

Event names pushed by the room engine, intent names sent to it, and the
parsing of inbound payloads into typed models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from src.room.models import (
    GameWon,
    NumberDrawn,
    PayloadError,
    RoomSnapshot,
    parse_model,
)


class InboundEvent(str, Enum):
    """Events pushed by the room engine."""

    ROOM_DATA = "room-data"
    NEW_NUMBER = "new-number"
    GAME_OVER = "game-over"
    GAME_RESET = "game-reset"
    ERROR = "error"


class Intent(str, Enum):
    """Requests the client sends to the room engine."""

    CREATE_ROOM = "create-room"
    JOIN_ROOM = "join-room"
    GENERATE_NUMBER = "generate-number"
    RESET_GAME = "reset-game"


class DiagnosticKind(Enum):
    """Transport-level happenings, reported but never raised."""

    CONNECTED = auto()
    DISCONNECTED = auto()
    CONNECT_ERROR = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A transport event observed on the channel."""

    kind: DiagnosticKind
    detail: str = ""


GUARDED_EVENTS: tuple[str, ...] = tuple(e.value for e in InboundEvent)

# Socket.IO reserves these names for connection lifecycle
TRANSPORT_EVENTS: dict[str, DiagnosticKind] = {
    "connect": DiagnosticKind.CONNECTED,
    "disconnect": DiagnosticKind.DISCONNECTED,
    "connect_error": DiagnosticKind.CONNECT_ERROR,
}

_SNAPSHOT_EVENTS = (InboundEvent.ROOM_DATA, InboundEvent.GAME_RESET)


def error_message(raw: Any) -> str:
    """Extract the human-readable text from an ``error`` push.

    The engine sends either ``{"message": "..."}`` or a bare string.
    """
    if isinstance(raw, dict):
        message = raw.get("message")
        if message is not None:
            return str(message)
        return str(raw) if raw else "Unknown error"
    if raw is None or raw == "":
        return "Unknown error"
    return str(raw)


def parse_inbound(
    event: InboundEvent | str, raw: Any
) -> RoomSnapshot | NumberDrawn | GameWon | str:
    """Turn a raw Socket.IO payload into its typed model.

    Raises:
        PayloadError: If the payload does not match the event's shape.
        ValueError: If *event* is not an engine event.
    """
    event = InboundEvent(event)
    if event in _SNAPSHOT_EVENTS:
        if not isinstance(raw, dict):
            raise PayloadError(event.value, f"expected an object, got {type(raw).__name__}")
        return parse_model(RoomSnapshot, event.value, raw)
    if event is InboundEvent.NEW_NUMBER:
        return parse_model(NumberDrawn, event.value, raw)
    if event is InboundEvent.GAME_OVER:
        return parse_model(GameWon, event.value, raw)
    return error_message(raw)
