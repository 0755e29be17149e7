"""
Housie Live - Client Session State

Immutable value objects for what this client knows. The state machine swaps
in a new ``ClientSessionState`` on every transition; readers never see a
half-applied update.
"""

from dataclasses import dataclass
from enum import Enum

from src.room.models import RoomSnapshot
from src.room.projections import RoomStatus, room_status


class Phase(Enum):
    """Which screen the client is on."""
    LOBBY = "lobby"
    IN_ROOM = "room"


@dataclass(frozen=True)
class Identity:
    """Who we are and which room we asked for (or were confirmed into)."""
    username: str
    room_id: str


@dataclass(frozen=True)
class Notice:
    """A message for the user that does not change session state."""
    message: str
    level: str = "error"


@dataclass(frozen=True)
class ClientSessionState:
    """
    Everything the client holds about the current session.

    Attributes:
        phase: Lobby until the engine confirms a room
        identity: Username and room id, provisional until ``room-data`` arrives
        room: Latest authoritative snapshot (None in the Lobby)
        last_number: Most recently drawn number
        winner: Username the engine declared the winner
        prompt_armed: Whether the "play again?" prompt is showing
    """
    phase: Phase = Phase.LOBBY
    identity: Identity | None = None
    room: RoomSnapshot | None = None
    last_number: int | None = None
    winner: str | None = None
    prompt_armed: bool = False

    def __post_init__(self) -> None:
        if self.prompt_armed and not self.winner:
            raise ValueError("The replay prompt can only show once a winner is set.")

    @property
    def in_room(self) -> bool:
        return self.phase is Phase.IN_ROOM

    @property
    def status(self) -> RoomStatus | None:
        """Derived room status; None while in the Lobby."""
        if not self.in_room:
            return None
        return room_status(self.winner)

    @property
    def room_id(self) -> str | None:
        """The room id the engine has confirmed, if any."""
        if not self.in_room:
            return None
        if self.room is not None and self.room.room_id:
            return self.room.room_id
        return self.identity.room_id if self.identity else None

    @property
    def username(self) -> str | None:
        return self.identity.username if self.identity else None


INITIAL_STATE = ClientSessionState()
