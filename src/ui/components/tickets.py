"""Ticket cards — one per player, marked numbers filled in."""

from __future__ import annotations

import html as html_lib

import streamlit as st

from src.room import projections
from src.room.models import Player


def render_tickets(players: tuple[Player, ...], my_username: str | None, winner: str | None) -> None:
    """Render every player's ticket in a three-column grid."""
    if not players:
        st.caption("No players yet.")
        return

    columns = st.columns(3)
    for idx, player in enumerate(players):
        with columns[idx % 3]:
            st.markdown(
                _ticket_html(player, player.username == my_username, player.username == winner),
                unsafe_allow_html=True,
            )


def _ticket_html(player: Player, is_me: bool, is_winner: bool) -> str:
    card_classes = ["ticket-card"]
    if is_me:
        card_classes.append("is-me")
    if is_winner:
        card_classes.append("winner")

    name = html_lib.escape(player.username)
    if is_me:
        name += " (You)"
    marked = len(player.marks)

    parts = [f'<div class="{" ".join(card_classes)}">']
    parts.append(
        f'<div class="ticket-name">{name}'
        f'<span class="ticket-count">{marked}/{len(player.ticket)}</span></div>'
    )
    for row in projections.ticket_rows(player):
        parts.append('<div class="ticket-row">')
        for number, is_marked in row:
            cls = "cell marked" if is_marked else "cell"
            parts.append(f'<div class="{cls}">{number}</div>')
        parts.append("</div>")
    parts.append("</div>")
    return "".join(parts)
