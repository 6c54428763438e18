"""Reconciliation between the overlay stack and platform navigation history.

Two stacks are kept length-consistent without either owning the other:

* opening an overlay pushes one entry tagged with the overlay id;
* a pop event landing on an entry that does not carry the current top id is
  a user back-navigation and closes the top overlay (no history change, the
  navigation already consumed the entry);
* explicitly closing the top overlay while its entry is current issues one
  programmatic ``back()``.

Pops produced by the bridge's own ``back()`` calls are counted in
``pending_pops`` and consumed silently, so delivery order (synchronous or
deferred) does not matter. Closing a non-top overlay leaves its entry in
place; the next back-navigation then lands on it and closes the new top.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from overlay_kit.api.history import (
    DEFAULT_STATE_KEY,
    BridgeState,
    HistoryPlatform,
    HistoryState,
)

_LOG = logging.getLogger("overlay_kit.runtime.history_bridge")

TopIdProvider = Callable[[], str | None]
BackHandler = Callable[[], None]


class RuntimeHistoryBridge:
    """Idle/listening state machine over an optional history platform."""

    def __init__(
        self,
        platform: HistoryPlatform | None,
        *,
        top_id: TopIdProvider,
        on_back: BackHandler,
        state_key: str = DEFAULT_STATE_KEY,
    ) -> None:
        self._platform = platform
        self._top_id = top_id
        self._on_back = on_back
        self._state_key = state_key
        self._state: BridgeState = "idle"
        self._pending_pops = 0

    @property
    def state(self) -> BridgeState:
        return self._state

    @property
    def available(self) -> bool:
        return self._platform is not None

    @property
    def pending_pops(self) -> int:
        return self._pending_pops

    def current_tag(self) -> str | None:
        """Return overlay id carried by the current history entry."""
        if self._platform is None:
            return None
        return self._tag_of(self._platform.current_state())

    def track(self, overlay_id: str) -> None:
        """Push one entry tagged with `overlay_id`."""
        platform = self._platform
        if platform is None:
            return
        self._listen()
        current = platform.current_state() or {}
        platform.push_state({**current, self._state_key: overlay_id})
        _LOG.debug("history_entry_pushed id=%s", overlay_id)

    def release(self, overlay_id: str, *, was_top: bool) -> bool:
        """Step back over the entry of an explicitly closed top overlay."""
        if self._platform is None or not was_top:
            return False
        if self.current_tag() != overlay_id:
            return False
        self._go_back()
        return True

    def release_all(self, count: int) -> int:
        """Step back once per closed overlay while entries remain tagged."""
        if self._platform is None:
            return 0
        stepped = 0
        for _ in range(count):
            if self.current_tag() is None:
                break
            self._go_back()
            stepped += 1
        return stepped

    def detach(self) -> None:
        """Remove the navigation listener and return to idle."""
        if self._platform is not None and self._state == "listening":
            self._platform.remove_pop_listener(self._handle_pop)
        self._state = "idle"
        self._pending_pops = 0

    def _listen(self) -> None:
        if self._state == "listening" or self._platform is None:
            return
        self._platform.add_pop_listener(self._handle_pop)
        self._state = "listening"
        _LOG.debug("history_bridge_listening")

    def _go_back(self) -> None:
        assert self._platform is not None
        self._pending_pops += 1
        self._platform.back()

    def _handle_pop(self, state: HistoryState | None) -> None:
        if self._pending_pops > 0:
            self._pending_pops -= 1
            return
        top = self._top_id()
        if top is None:
            return
        if self._tag_of(state) == top:
            return
        _LOG.debug("history_back_closes_top id=%s", top)
        self._on_back()

    def _tag_of(self, state: HistoryState | None) -> str | None:
        if not state:
            return None
        value = state.get(self._state_key)
        return None if value is None else str(value)


HistoryBridge = RuntimeHistoryBridge
