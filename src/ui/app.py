"""Housie Live — Streamlit Application Entrypoint."""

from __future__ import annotations

import streamlit as st

from src.config.settings import configure_logging, get_settings
from src.session.client import open_room_session
from src.session.machine import RoomSession
from src.ui.components.notices import NoticeBoard, render_notices


def _get_session() -> tuple[RoomSession, NoticeBoard]:
    """One room session per browser tab, opened on first render."""
    ss = st.session_state
    session: RoomSession | None = ss.get("room_session")
    if session is None or session.closed:
        board = NoticeBoard()
        session = open_room_session(get_settings(), notice_listeners=[board.post])
        ss["room_session"] = session
        ss["notice_board"] = board
    return session, ss["notice_board"]


@st.fragment(run_every=1)
def _watch_session() -> None:
    """Rerun the page when a push or the prompt timer changed the state.

    Socket.IO handlers run off the script thread, so they cannot trigger a
    rerun themselves.
    """
    ss = st.session_state
    session: RoomSession | None = ss.get("room_session")
    board: NoticeBoard | None = ss.get("notice_board")
    if session is None:
        return
    if session.version != ss.get("_seen_version") or (board is not None and len(board)):
        st.rerun(scope="app")


def main() -> None:
    """Application entrypoint. Must call ``st.set_page_config`` first."""
    st.set_page_config(
        page_title="Housie Live",
        page_icon="🎲",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    configure_logging()

    from src.ui.themes import load_css
    load_css()

    session, board = _get_session()
    st.session_state["_seen_version"] = session.version
    render_notices(board)

    # Page routing (lazy imports to avoid circular deps)
    if session.state.in_room:
        from src.ui.views.room import render_room_page
        render_room_page(session)
    else:
        from src.ui.views.home import render_home_page
        render_home_page(session, board)

    _watch_session()


if __name__ == "__main__":
    main()
