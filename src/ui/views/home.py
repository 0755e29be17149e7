"""Home page — title, how to play, room creation/joining."""

from __future__ import annotations

import streamlit as st

from src.session.machine import RoomSession
from src.ui.components.lobby import render_lobby
from src.ui.components.notices import NoticeBoard


def render_home_page(session: RoomSession, board: NoticeBoard | None = None) -> None:
    """Render the home / lobby page."""
    st.title("🎲 Housie Lobby")
    st.caption("Numbers 1 to 90, one ticket each, first full house wins")

    render_lobby(session, board)

    st.divider()

    with st.expander("How to play"):
        st.markdown(
            """
- **Create** a room and share its code, or **join** a friend's room.
- Everyone gets a ticket of **15 numbers** between 1 and 90.
- Anyone in the room can **call the next number**.
- Called numbers are marked on every ticket automatically.
- The server declares the winner; after a short pause you can play again.
"""
        )
