"""UI components for Housie Live."""

from src.ui.components.lobby import render_lobby
from src.ui.components.notices import NoticeBoard, render_notices
from src.ui.components.number_board import render_number_board
from src.ui.components.tickets import render_tickets

__all__ = [
    "NoticeBoard",
    "render_lobby",
    "render_notices",
    "render_number_board",
    "render_tickets",
]
