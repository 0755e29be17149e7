"""
Housie Live Client Session.

The room state machine, its win-prompt timer, and local intent validation.
"""

from src.session.client import open_room_session
from src.session.intents import IntentDispatcher, IntentRejected
from src.session.machine import RoomSession
from src.session.scheduler import WinPromptScheduler
from src.session.state import INITIAL_STATE, ClientSessionState, Identity, Notice, Phase

__all__ = [
    "INITIAL_STATE",
    "ClientSessionState",
    "Identity",
    "IntentDispatcher",
    "IntentRejected",
    "Notice",
    "Phase",
    "RoomSession",
    "WinPromptScheduler",
    "open_room_session",
]
