"""In-process navigation history for hosts without a browser."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType

from overlay_kit.api.history import HistoryState, PopListener
from overlay_kit.runtime.errors import call_isolated

_LOG = logging.getLogger("overlay_kit.runtime.history_platform")


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One navigation entry."""

    url: str
    state: HistoryState | None = None


class InMemoryHistory:
    """Entry list plus cursor with browser-style push/back/forward.

    Pushing truncates forward entries. Moving the cursor emits a pop event
    carrying the landed entry's state, either immediately or, with
    ``deferred=True``, on the next ``flush()`` the way a browser queues
    ``popstate`` after ``history.back()``.
    """

    def __init__(self, *, url: str = "/", deferred: bool = False) -> None:
        self._entries: list[HistoryEntry] = [HistoryEntry(url=url)]
        self._cursor = 0
        self._deferred = deferred
        self._listeners: list[PopListener] = []
        self._queued: deque[HistoryState | None] = deque()

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def queued_event_count(self) -> int:
        return len(self._queued)

    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def current_state(self) -> HistoryState | None:
        return self._entries[self._cursor].state

    def push_state(self, state: HistoryState, url: str | None = None) -> None:
        current = self._entries[self._cursor]
        del self._entries[self._cursor + 1 :]
        frozen = MappingProxyType(dict(state))
        self._entries.append(HistoryEntry(url=current.url if url is None else url, state=frozen))
        self._cursor = len(self._entries) - 1

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def go(self, delta: int) -> None:
        """Move the cursor; out-of-range moves are ignored like a browser."""
        target = self._cursor + delta
        if delta == 0 or target < 0 or target >= len(self._entries):
            return
        self._cursor = target
        self._queued.append(self._entries[target].state)
        if not self._deferred:
            self.flush()

    def flush(self) -> int:
        """Deliver queued pop events and return how many were delivered."""
        delivered = 0
        while self._queued:
            state = self._queued.popleft()
            for listener in tuple(self._listeners):
                call_isolated(_LOG, "history_pop_listener", listener, state)
            delivered += 1
        return delivered

    def add_pop_listener(self, listener: PopListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_pop_listener(self, listener: PopListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
