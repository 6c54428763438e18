"""Public navigation-history API contracts."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Literal, Protocol

HistoryState = Mapping[str, object]
PopListener = Callable[[HistoryState | None], None]
BridgeState = Literal["idle", "listening"]

DEFAULT_STATE_KEY = "__modal_state__"


class HistoryPlatform(Protocol):
    """Browser-history shaped navigation surface."""

    def current_state(self) -> HistoryState | None:
        """Return state of the current entry."""

    def push_state(self, state: HistoryState) -> None:
        """Push one entry and make it current."""

    def back(self) -> None:
        """Navigate one entry back."""

    def add_pop_listener(self, listener: PopListener) -> None:
        """Register listener for navigation events."""

    def remove_pop_listener(self, listener: PopListener) -> None:
        """Remove a navigation listener."""


class HistoryBridge(Protocol):
    """Keeps overlay depth and history depth aligned."""

    @property
    def state(self) -> BridgeState:
        """Return idle/listening state."""

    def track(self, overlay_id: str) -> None:
        """Record one opened overlay as a history entry."""

    def release(self, overlay_id: str, *, was_top: bool) -> bool:
        """Consume the entry of an explicitly closed overlay."""

    def release_all(self, count: int) -> int:
        """Consume entries for a bulk close."""

    def detach(self) -> None:
        """Stop listening and return to idle."""


def create_in_memory_history(*, url: str = "/", deferred: bool = False) -> HistoryPlatform:
    """Create an in-process history platform."""
    from overlay_kit.runtime.history_platform import InMemoryHistory

    return InMemoryHistory(url=url, deferred=deferred)
