"""Number board component — all 90 numbers with called and winning cells lit."""

from __future__ import annotations

import streamlit as st

from src.room import projections
from src.room.models import RoomSnapshot


def render_number_board(room: RoomSnapshot | None, winner: str | None) -> None:
    """Render the caller's 1-90 board.

    Args:
        room: Latest room snapshot.
        winner: Declared winner; their marked numbers get a ring.
    """
    marks = projections.winner_marks(room, winner)
    called = projections.called_count(room)

    html = ['<div class="number-board">']
    html.append(f'<div class="board-title">Called Numbers &mdash; {called}/90</div>')
    for row in projections.board_rows():
        html.append('<div class="board-row">')
        for number in row:
            classes = ["cell"]
            if projections.is_called(room, number):
                classes.append("called")
            if number in marks:
                classes.append("winning")
            html.append(f'<div class="{" ".join(classes)}">{number}</div>')
        html.append("</div>")
    html.append("</div>")
    st.markdown("".join(html), unsafe_allow_html=True)
