"""CSS injection and HTML banner helpers for the Housie theme."""

import html
from pathlib import Path

import streamlit as st


def load_css() -> None:
    """Inject the Housie CSS theme into the Streamlit app."""
    css_path = Path(__file__).parent / "housie.css"
    css_text = css_path.read_text(encoding="utf-8")
    st.markdown(f"<style>{css_text}</style>", unsafe_allow_html=True)


def render_winner_banner(name: str) -> None:
    """Render the winner overlay with glow animation."""
    st.markdown(
        '<div class="winner-banner">'
        f"<h1>&#127942; {html.escape(name)} wins! &#127942;</h1>"
        "</div>",
        unsafe_allow_html=True,
    )


def render_last_called(number: int | None) -> None:
    """Render the big last-called number badge."""
    shown = "&mdash;" if number is None else str(number)
    st.markdown(
        f'<div class="last-called">Last Called: <span class="ball">{shown}</span></div>',
        unsafe_allow_html=True,
    )


def render_room_code(room_id: str | None) -> None:
    st.markdown(
        f'<div class="room-code">Room: {html.escape(room_id or "?")}</div>',
        unsafe_allow_html=True,
    )
