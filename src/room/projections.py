"""
Housie Live - Room Projections

Read-only views over a room snapshot. Nothing here is cached: every answer
is recomputed from the snapshot and winner the caller passes in, so it can
never disagree with the latest push.
"""

from __future__ import annotations

from enum import Enum

from src.room.models import HIGHEST_NUMBER, LOWEST_NUMBER, Player, RoomSnapshot

BOARD_COLUMNS = 9
TICKET_COLUMNS = 5


class RoomStatus(Enum):
    """Whether the current game is still being drawn."""
    ACTIVE = "active"
    FINISHED = "finished"


def room_status(winner: str | None) -> RoomStatus:
    """A room is finished exactly when a winner has been announced."""
    return RoomStatus.FINISHED if winner else RoomStatus.ACTIVE


def find_player(room: RoomSnapshot | None, username: str | None) -> Player | None:
    """Look up a player by username."""
    if room is None or not username:
        return None
    return next((p for p in room.players if p.username == username), None)


def is_called(room: RoomSnapshot | None, number: int) -> bool:
    """True if *number* has been drawn in this game."""
    return room is not None and number in room.numbers_called


def winner_marks(room: RoomSnapshot | None, winner: str | None) -> frozenset[int]:
    """The winner's marked numbers, or an empty set while nobody has won."""
    player = find_player(room, winner)
    return player.marks if player else frozenset()


def is_winning_number(room: RoomSnapshot | None, winner: str | None, number: int) -> bool:
    """True if *number* is one of the marks on the winner's ticket."""
    return number in winner_marks(room, winner)


def called_count(room: RoomSnapshot | None) -> int:
    return len(room.numbers_called) if room else 0


def board_rows(columns: int = BOARD_COLUMNS) -> list[list[int]]:
    """Every number on the caller's board, split into rows."""
    numbers = list(range(LOWEST_NUMBER, HIGHEST_NUMBER + 1))
    return [numbers[i:i + columns] for i in range(0, len(numbers), columns)]


def ticket_rows(player: Player, columns: int = TICKET_COLUMNS) -> list[list[tuple[int, bool]]]:
    """A player's ticket as rows of ``(number, is_marked)`` cells."""
    cells = [(number, number in player.marks) for number in player.ticket]
    return [cells[i:i + columns] for i in range(0, len(cells), columns)]
