"""
Housie Live Real-time Sync.

Socket.IO channel, engine event vocabulary, and handler lifecycle guard.
"""

from src.realtime.channel import ChannelClosedError, ChannelHandle, Subscription
from src.realtime.events import (
    Diagnostic,
    DiagnosticKind,
    InboundEvent,
    Intent,
    parse_inbound,
)
from src.realtime.guard import Binding, SubscriptionGuard

__all__ = [
    "Binding",
    "ChannelClosedError",
    "ChannelHandle",
    "Diagnostic",
    "DiagnosticKind",
    "InboundEvent",
    "Intent",
    "Subscription",
    "SubscriptionGuard",
    "parse_inbound",
]
