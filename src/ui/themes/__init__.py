"""Visual theme for Housie Live."""

from src.ui.themes.animations import (
    load_css,
    render_last_called,
    render_room_code,
    render_winner_banner,
)

__all__ = [
    "load_css",
    "render_last_called",
    "render_room_code",
    "render_winner_banner",
]
