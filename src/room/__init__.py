"""
Housie Live Room Data.

Wire models pushed by the room engine, room codes, and read-only projections.
"""

from src.room.codes import generate_room_code, normalize_room_id
from src.room.models import GameWon, NumberDrawn, PayloadError, Player, RoomSnapshot
from src.room.projections import RoomStatus

__all__ = [
    "generate_room_code",
    "normalize_room_id",
    "GameWon",
    "NumberDrawn",
    "PayloadError",
    "Player",
    "RoomSnapshot",
    "RoomStatus",
]
