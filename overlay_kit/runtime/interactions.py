"""Presentation-neutral input handling and layering for the overlay stack."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from overlay_kit.api.overlays import OverlayRecord
from overlay_kit.runtime.errors import call_isolated
from overlay_kit.runtime.overlay_store import RuntimeOverlayStore

_LOG = logging.getLogger("overlay_kit.runtime.interactions")
_ESCAPE_KEYS = frozenset({"escape", "esc"})


@dataclass(frozen=True, slots=True)
class OverlayLayer:
    """One record with its resolved stacking order."""

    record: OverlayRecord
    z_index: int


class OverlayInteractions:
    """Routes button, backdrop and keyboard input to the overlay store.

    Every method returns whether the input was consumed.
    """

    def __init__(self, store: RuntimeOverlayStore) -> None:
        self._store = store
        self._resolving: set[str] = set()

    def layers(self) -> tuple[OverlayLayer, ...]:
        """Return bottom-first render plan with stacked z-order."""
        base = self._store.config.stack.base_z_index
        return tuple(
            OverlayLayer(record=record, z_index=(record.options.z_index or base) + position)
            for position, record in enumerate(self._store.get_all())
        )

    def press_confirm(self, overlay_id: str) -> bool:
        record = self._store.get(overlay_id)
        if record is None:
            return False
        if record.kind == "confirm":
            self._fire_then_close(record, "on_confirm")
        else:
            # Alert acknowledgement runs from the store's removal hook.
            self._store.close(overlay_id)
        return True

    def press_cancel(self, overlay_id: str) -> bool:
        record = self._store.get(overlay_id)
        if record is None:
            return False
        if record.kind == "confirm":
            self._fire_then_close(record, "on_cancel")
        else:
            self._store.close(overlay_id)
        return True

    def click_backdrop(self, overlay_id: str) -> bool:
        record = self._store.get(overlay_id)
        if record is None or record.options.close_on_backdrop is False:
            return False
        self._store.close(overlay_id)
        return True

    def press_key(self, key: str) -> bool:
        if key.strip().lower() not in _ESCAPE_KEYS:
            return False
        record = self._store.top()
        if record is None or record.options.close_on_esc is False:
            return False
        self._store.close(record.id)
        return True

    def _fire_then_close(self, record: OverlayRecord, callback_name: str) -> None:
        if record.id in self._resolving:
            return
        callback = getattr(record.options, callback_name, None)
        self._resolving.add(record.id)
        try:
            if callback is not None:
                call_isolated(_LOG, f"overlay_{callback_name}", callback)
            self._store.close(record.id)
        finally:
            self._resolving.discard(record.id)
