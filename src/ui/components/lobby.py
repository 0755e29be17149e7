"""Lobby component — create or join a room."""

from __future__ import annotations

import streamlit as st

from src.session.intents import MAX_USERNAME_LENGTH, IntentRejected
from src.session.machine import RoomSession
from src.ui.components.notices import NoticeBoard, awaiting_confirmation

# Board error count when the last create/join was sent
_ERROR_MARK_KEY = "_intent_error_mark"


def render_lobby(session: RoomSession, board: NoticeBoard | None = None) -> None:
    """Render the room creation/joining UI."""
    pending = session.state.identity
    mark = st.session_state.get(_ERROR_MARK_KEY)
    if pending is not None and awaiting_confirmation(board, mark):
        st.info(
            f"Waiting for the server to confirm room **{pending.room_id}** "
            f"for {pending.username}..."
        )

    if not session.connected:
        st.warning("Not connected to the game server yet.")
        if st.button("Retry connection"):
            if session.reconnect():
                st.rerun()
            else:
                st.error("Still cannot reach the game server.")

    tab_create, tab_join = st.tabs(["Create Room", "Join Room"])

    with tab_create:
        _render_create_form(session, board)

    with tab_join:
        _render_join_form(session, board)


def _mark_submitted(board: NoticeBoard | None) -> None:
    st.session_state[_ERROR_MARK_KEY] = board.errors_posted if board is not None else None


def _render_create_form(session: RoomSession, board: NoticeBoard | None) -> None:
    with st.form("create_room_form"):
        username = st.text_input(
            "Your Name",
            max_chars=MAX_USERNAME_LENGTH,
            placeholder="Enter your name...",
        )
        submitted = st.form_submit_button("Create Room", type="primary")

    if submitted:
        _mark_submitted(board)
        try:
            code = session.create_room(username)
        except IntentRejected as e:
            st.error(str(e))
            return
        st.success(f"Room {code} requested. Share the code with your friends!")


def _render_join_form(session: RoomSession, board: NoticeBoard | None) -> None:
    with st.form("join_room_form"):
        username = st.text_input(
            "Your Name",
            max_chars=MAX_USERNAME_LENGTH,
            placeholder="Enter your name...",
        )
        code = st.text_input(
            "Room ID",
            max_chars=12,
            placeholder="e.g. AB3CDE",
        )
        submitted = st.form_submit_button("Join Room", type="primary")

    if submitted:
        _mark_submitted(board)
        try:
            session.join_room(username, code)
        except IntentRejected as e:
            st.error(str(e))
