"""
Housie Live - Intent Dispatcher

Validates user intents locally and emits them on the channel. Nothing is
retried: if an intent cannot be sent the user is told and can click again.
"""

from __future__ import annotations

import logging
from typing import Callable

from src.realtime.channel import ChannelHandle
from src.realtime.events import Intent
from src.room.codes import generate_room_code, normalize_room_id

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 30

NOT_CONNECTED = "Not connected to the game server. Try again in a moment."


class IntentRejected(ValueError):
    """An intent failed a local precondition; the message is shown to the user."""


def validate_username(username: str | None) -> str:
    """Strip and check a player name.

    Raises:
        IntentRejected: If the name is blank or too long.
    """
    name = (username or "").strip()
    if not name:
        raise IntentRejected("Enter your name!")
    if len(name) > MAX_USERNAME_LENGTH:
        raise IntentRejected(f"Names can be at most {MAX_USERNAME_LENGTH} characters.")
    return name


def validate_room_id(room_id: str | None) -> str:
    """Normalize a room id and make sure there is one.

    Raises:
        IntentRejected: If the id is blank.
    """
    normalized = normalize_room_id(room_id)
    if not normalized:
        raise IntentRejected("Enter name and Room ID!")
    return normalized


class IntentDispatcher:
    """Sends validated intents to the room engine."""

    def __init__(
        self,
        channel: ChannelHandle,
        code_factory: Callable[[], str] = generate_room_code,
    ) -> None:
        self._channel = channel
        self._code_factory = code_factory

    def create_room(self, username: str | None) -> tuple[str, str]:
        """Ask the engine for a new room under a freshly generated code.

        Returns:
            ``(username, room_id)`` as sent.
        """
        name = validate_username(username)
        room_id = normalize_room_id(self._code_factory())
        self._send(Intent.CREATE_ROOM, {"roomID": room_id, "username": name})
        return name, room_id

    def join_room(self, username: str | None, room_id: str | None) -> tuple[str, str]:
        """Ask to join an existing room.

        Returns:
            ``(username, room_id)`` as sent.
        """
        if not (username or "").strip() or not normalize_room_id(room_id):
            raise IntentRejected("Enter name and Room ID!")
        name = validate_username(username)
        code = validate_room_id(room_id)
        self._send(Intent.JOIN_ROOM, {"roomID": code, "username": name})
        return name, code

    def request_draw(self, room_id: str | None) -> None:
        """Ask the engine to call the next number."""
        self._send(Intent.GENERATE_NUMBER, self._known_room(room_id))

    def request_reset(self, room_id: str | None) -> None:
        """Ask the engine to start a new game in the same room."""
        self._send(Intent.RESET_GAME, self._known_room(room_id))

    def _known_room(self, room_id: str | None) -> str:
        code = normalize_room_id(room_id)
        if not code:
            raise IntentRejected("You are not in a room.")
        return code

    def _send(self, intent: Intent, payload: object) -> None:
        if not self._channel.send(intent, payload):
            raise IntentRejected(NOT_CONNECTED)
        logger.info("Sent %s", intent.value)
