"""Synchronous change channel for store observers."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from typing import Generic, TypeVar

from overlay_kit.api.events import Subscription
from overlay_kit.runtime.errors import call_isolated

_LOG = logging.getLogger("overlay_kit.runtime.channel")

TValue = TypeVar("TValue")


class RuntimeChangeChannel(Generic[TValue]):
    """In-process pub/sub with handler isolation and ordered re-entrant delivery.

    A handler only receives values published after it subscribed. This also
    holds for handlers added during dispatch: values already queued at that
    point skip them, so a subscriber synced through `deliver` never sees an
    older snapshot afterwards.
    """

    def __init__(self, *, name: str = "channel") -> None:
        self._name = name
        self._next_id = 1
        self._handlers: dict[int, Callable[[TValue], None]] = {}
        self._joined_at: dict[int, int] = {}
        self._published = 0
        self._pending: deque[tuple[int, TValue]] = deque()
        self._dispatching = False

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Callable[[TValue], None]) -> Subscription:
        """Register handler and return its token."""
        sub_id = self._next_id
        self._next_id += 1
        self._handlers[sub_id] = handler
        self._joined_at[sub_id] = self._published
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        self._handlers.pop(subscription.id, None)
        self._joined_at.pop(subscription.id, None)

    def deliver(self, subscription: Subscription, value: TValue) -> bool:
        """Deliver one value to a single subscriber."""
        handler = self._handlers.get(subscription.id)
        if handler is None:
            return False
        return call_isolated(_LOG, f"{self._name}_observer", handler, value)

    def publish(self, value: TValue) -> int:
        """Publish one value and return number of invoked handlers.

        Values published from inside a handler are queued and delivered after
        the current round completes.
        """
        self._published += 1
        self._pending.append((self._published, value))
        if self._dispatching:
            return 0
        self._dispatching = True
        invoked = 0
        try:
            while self._pending:
                sequence, current = self._pending.popleft()
                for sub_id, handler in tuple(self._handlers.items()):
                    if self._joined_at.get(sub_id, sequence) >= sequence:
                        continue
                    call_isolated(_LOG, f"{self._name}_observer", handler, current)
                    invoked += 1
        finally:
            self._dispatching = False
        return invoked

    def clear(self) -> None:
        """Drop all subscriptions."""
        self._handlers.clear()
        self._joined_at.clear()


ChangeChannel = RuntimeChangeChannel
