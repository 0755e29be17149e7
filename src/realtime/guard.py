"""
Housie Live - Subscription Lifecycle Guard

Keeps at most one handler per engine event bound on the channel. Binding an
event that is already bound replaces the old handler instead of stacking a
second one, so a view that mounts twice never doubles its side effects.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

from src.realtime.channel import ChannelHandle, Subscription
from src.realtime.events import GUARDED_EVENTS

logger = logging.getLogger(__name__)


class Binding:
    """Disposer for the handlers attached by one :meth:`SubscriptionGuard.bind_all` call."""

    def __init__(self, guard: SubscriptionGuard, subscriptions: dict[str, Subscription]) -> None:
        self._guard = guard
        self._subscriptions = subscriptions
        self._disposed = False

    @property
    def events(self) -> tuple[str, ...]:
        return tuple(self._subscriptions)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> int:
        """Detach the handlers this binding still owns.

        Returns the number of handlers detached; 0 on repeat calls.
        """
        if self._disposed:
            return 0
        self._disposed = True
        return self._guard._release(self._subscriptions)

    __call__ = dispose


class SubscriptionGuard:
    """Bind-or-replace registry of engine event handlers, keyed by event name."""

    def __init__(self, channel: ChannelHandle) -> None:
        self._channel = channel
        self._active: dict[str, Subscription] = {}
        self._lock = threading.Lock()

    def bind_all(self, handlers: Mapping[str, Callable[[Any], None]]) -> Binding:
        """Attach *handlers*, replacing any handler already bound to the same event.

        Raises:
            ValueError: If a key is not one of the guarded engine events.
        """
        names = {getattr(event, "value", event): handler for event, handler in handlers.items()}
        unknown = sorted(set(names) - set(GUARDED_EVENTS))
        if unknown:
            raise ValueError(f"Not an engine event: {', '.join(unknown)}")

        subscriptions: dict[str, Subscription] = {}
        with self._lock:
            for name, handler in names.items():
                previous = self._active.pop(name, None)
                if previous is not None:
                    previous.cancel()
                    logger.debug("Replaced handler for %s", name)
                subscription = self._channel.subscribe(name, handler)
                self._active[name] = subscription
                subscriptions[name] = subscription
        logger.info("Bound %d event handlers", len(subscriptions))
        return Binding(self, subscriptions)

    def dispose_all(self) -> int:
        """Detach every handler the guard holds."""
        with self._lock:
            active = list(self._active.values())
            self._active.clear()
        for subscription in active:
            subscription.cancel()
        if active:
            logger.info("Disposed %d event handlers", len(active))
        return len(active)

    @property
    def bound_events(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._active)

    def _release(self, subscriptions: dict[str, Subscription]) -> int:
        released = 0
        with self._lock:
            for name, subscription in subscriptions.items():
                # Only detach what is still ours; a later bind_all may own it now
                if self._active.get(name) is subscription:
                    del self._active[name]
                    subscription.cancel()
                    released += 1
        return released
