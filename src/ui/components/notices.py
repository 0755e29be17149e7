"""Notice board — collects engine errors and connection warnings for display.

Notices arrive on the Socket.IO thread and are drained on the next rerun.
"""

from __future__ import annotations

import threading
from collections import deque

import streamlit as st

from src.session.state import Notice

_ICONS = {"error": "🚫", "warning": "⚠️", "info": "ℹ️"}


class NoticeBoard:
    """Thread-safe queue of notices waiting to be shown.

    ``errors_posted`` counts every error ever posted, drained or not, so a
    view can tell whether the engine answered an intent with an error.
    """

    def __init__(self, maxlen: int = 20) -> None:
        self._notices: deque[Notice] = deque(maxlen=maxlen)
        self._errors_posted = 0
        self._lock = threading.Lock()

    def post(self, notice: Notice) -> None:
        with self._lock:
            self._notices.append(notice)
            if notice.level == "error":
                self._errors_posted += 1

    @property
    def errors_posted(self) -> int:
        with self._lock:
            return self._errors_posted

    def __len__(self) -> int:
        with self._lock:
            return len(self._notices)

    def drain(self) -> list[Notice]:
        with self._lock:
            notices = list(self._notices)
            self._notices.clear()
        return notices


def awaiting_confirmation(board: NoticeBoard | None, errors_at_submit: int | None) -> bool:
    """True while an intent sent at *errors_at_submit* has drawn no error yet."""
    if board is None or errors_at_submit is None:
        return False
    return board.errors_posted == errors_at_submit


def render_notices(board: NoticeBoard) -> None:
    """Show pending notices as toasts."""
    for notice in board.drain():
        st.toast(notice.message, icon=_ICONS.get(notice.level, "ℹ️"))
