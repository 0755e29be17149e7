"""
Housie Live - Session Factory

Builds a fully wired RoomSession from settings. There is no
module-level instance: whoever opens a session owns it and closes it.
"""

from __future__ import annotations

import functools
import logging
from typing import Iterable

from src.config.settings import Settings, get_settings
from src.realtime.channel import ChannelHandle
from src.room.codes import generate_room_code
from src.session.intents import IntentDispatcher
from src.session.machine import NoticeListener, RoomSession

logger = logging.getLogger(__name__)


def build_channel(settings: Settings) -> ChannelHandle:
    """Create (but do not connect) the channel described by *settings*."""
    return ChannelHandle(
        settings.server_url,
        socketio_path=settings.socketio_path,
        connect_timeout=settings.connect_timeout,
        reconnection=settings.reconnection,
    )


def open_room_session(
    settings: Settings | None = None,
    *,
    channel: ChannelHandle | None = None,
    notice_listeners: Iterable[NoticeListener] = (),
) -> RoomSession:
    """Create a RoomSession, bind its handlers and connect it.

    A failed connection is not an error: the session starts in the Lobby
    and intents report "not connected" until the transport comes up.
    Notice listeners are attached before connecting so they also see a
    failed first attempt.
    """
    settings = settings or get_settings()
    channel = channel or build_channel(settings)
    dispatcher = IntentDispatcher(
        channel,
        code_factory=functools.partial(generate_room_code, settings.room_code_length),
    )
    session = RoomSession(
        channel,
        dispatcher=dispatcher,
        prompt_delay=settings.win_prompt_delay,
    )
    for listener in notice_listeners:
        session.add_notice_listener(listener)
    if not session.start():
        logger.warning("Room session started offline (%s)", settings.server_url)
    return session
