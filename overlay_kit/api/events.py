"""Public change-channel API contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

TValue = TypeVar("TValue")


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class ChangeChannel(Protocol[TValue]):
    """Synchronous in-process publish/subscribe contract for one value type."""

    @property
    def subscriber_count(self) -> int:
        """Return number of live subscriptions."""

    def subscribe(self, handler: Callable[[TValue], None]) -> Subscription:
        """Register handler and return its token."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""

    def publish(self, value: TValue) -> int:
        """Deliver value to every handler and return invocation count."""

    def clear(self) -> None:
        """Drop all subscriptions."""


def create_change_channel(*, name: str = "channel") -> ChangeChannel[TValue]:
    """Create default change-channel implementation."""
    from overlay_kit.runtime.channel import RuntimeChangeChannel

    return RuntimeChangeChannel(name=name)
