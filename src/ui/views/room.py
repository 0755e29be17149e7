"""Room page — called numbers, tickets, winner banner and replay prompt."""

from __future__ import annotations

import streamlit as st

from src.session.intents import IntentRejected
from src.session.machine import RoomSession
from src.ui.components.number_board import render_number_board
from src.ui.components.tickets import render_tickets
from src.ui.themes.animations import (
    render_last_called,
    render_room_code,
    render_winner_banner,
)


def render_room_page(session: RoomSession) -> None:
    """Render the main room view from the session's current state."""
    # One read: every widget below renders the same snapshot
    state = session.state
    room = state.room

    if state.winner:
        render_winner_banner(state.winner)

    header_left, header_right = st.columns([2, 1])
    with header_left:
        render_room_code(state.room_id)
    with header_right:
        render_last_called(state.last_number)

    if state.prompt_armed:
        _render_replay_prompt(session)
    elif not state.winner:
        if st.button("Call Next Number", type="primary", key="btn_call_next"):
            _run(session.draw_next)
    elif session.prompt_pending:
        st.caption("Game over! Hang on a moment...")

    render_number_board(room, state.winner)

    st.subheader("Players")
    render_tickets(room.players if room else (), state.username, state.winner)


def _render_replay_prompt(session: RoomSession) -> None:
    st.subheader("Play again?")
    col_yes, col_no = st.columns(2)
    with col_yes:
        if st.button("Yes", type="primary", use_container_width=True, key="btn_replay_yes"):
            _run(session.accept_replay)
    with col_no:
        if st.button("No", use_container_width=True, key="btn_replay_no"):
            _run(session.decline_replay)
            st.rerun()


def _run(action) -> None:
    """Call an intent, showing a local validation failure inline."""
    try:
        action()
    except IntentRejected as e:
        st.error(str(e))
