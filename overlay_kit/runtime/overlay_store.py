"""Overlay stack store implementation."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import replace

from overlay_kit.api.history import HistoryPlatform
from overlay_kit.api.overlays import (
    OVERLAY_KINDS,
    AlertOptions,
    ConfirmOptions,
    CustomOptions,
    OverlayKind,
    OverlayObserver,
    OverlayOptions,
    OverlayRecord,
    OverlayStore,
    Unsubscribe,
)
from overlay_kit.runtime.channel import RuntimeChangeChannel
from overlay_kit.runtime.config import OverlayConfig, get_overlay_config
from overlay_kit.runtime.errors import call_isolated
from overlay_kit.runtime.history_bridge import RuntimeHistoryBridge

_LOG = logging.getLogger("overlay_kit.runtime.overlay_store")


class RuntimeOverlayStore(OverlayStore):
    """Ordered overlay records with one notification per logical change."""

    def __init__(
        self,
        *,
        config: OverlayConfig | None = None,
        history: HistoryPlatform | None = None,
    ) -> None:
        self._config = config if config is not None else get_overlay_config()
        self._records: list[OverlayRecord] = []
        self._closing: set[str] = set()
        self._observers: RuntimeChangeChannel[tuple[OverlayRecord, ...]] = RuntimeChangeChannel(
            name="overlay"
        )
        platform = history if self._config.history.enabled else None
        self._history = RuntimeHistoryBridge(
            platform,
            top_id=self._top_id,
            on_back=self._close_top_from_navigation,
            state_key=self._config.history.state_key,
        )

    @property
    def config(self) -> OverlayConfig:
        return self._config

    @property
    def history(self) -> RuntimeHistoryBridge:
        return self._history

    def open(self, kind: OverlayKind, options: OverlayOptions) -> str:
        """Append one overlay with kind defaults merged under `options`."""
        if kind not in OVERLAY_KINDS:
            raise ValueError(f"unknown overlay kind: {kind!r}")
        overlay_id = options.id or str(uuid.uuid4())
        if self._index_of(overlay_id) is not None:
            _LOG.debug("overlay_reopened id=%s", overlay_id)
            self.close(overlay_id)
        record = OverlayRecord(
            id=overlay_id,
            kind=kind,
            options=self._with_defaults(kind, replace(options, id=overlay_id)),
            visible=True,
            created_at=time.monotonic(),
        )
        self._records.append(record)
        self._history.track(overlay_id)
        _LOG.debug("overlay_opened id=%s kind=%s depth=%d", overlay_id, kind, len(self._records))
        self._notify()
        return overlay_id

    def alert(self, options: AlertOptions) -> str:
        return self.open("alert", options)

    def confirm(self, options: ConfirmOptions) -> str:
        return self.open("confirm", options)

    def custom(self, options: CustomOptions) -> str:
        return self.open("custom", options)

    def close(self, overlay_id: str) -> None:
        """Close one overlay; unknown or already-closing ids are ignored."""
        self._remove(overlay_id, reconcile_history=True)

    def close_top(self) -> None:
        top_id = self._top_id()
        if top_id is None:
            return
        self.close(top_id)

    def close_all(self) -> None:
        """Run removal hooks bottom to top, then clear with one notification."""
        records = [record for record in self._records if record.id not in self._closing]
        if not records:
            return
        self._closing.update(record.id for record in records)
        try:
            for record in records:
                self._run_removal_hook(record)
        finally:
            self._closing.difference_update(record.id for record in records)
        removed = {record.id for record in records}
        self._records = [record for record in self._records if record.id not in removed]
        stepped = self._history.release_all(len(records))
        _LOG.debug("overlay_closed_all count=%d history_steps=%d", len(records), stepped)
        self._notify()

    def get_all(self) -> tuple[OverlayRecord, ...]:
        return tuple(self._records)

    def get(self, overlay_id: str) -> OverlayRecord | None:
        index = self._index_of(overlay_id)
        return None if index is None else self._records[index]

    def top(self) -> OverlayRecord | None:
        return self._records[-1] if self._records else None

    def active(self) -> bool:
        return bool(self._records)

    def count(self) -> int:
        return len(self._records)

    def subscribe(self, observer: OverlayObserver) -> Unsubscribe:
        """Register observer and deliver the current state before returning."""
        subscription = self._observers.subscribe(observer)
        self._observers.deliver(subscription, self.get_all())

        def unsubscribe() -> None:
            self._observers.unsubscribe(subscription)

        return unsubscribe

    def destroy(self) -> None:
        """Teardown for test isolation and app shutdown."""
        self.close_all()
        self._observers.clear()
        self._history.detach()

    def _remove(self, overlay_id: str, *, reconcile_history: bool) -> None:
        if overlay_id in self._closing:
            return
        index = self._index_of(overlay_id)
        if index is None:
            return
        record = self._records[index]
        self._closing.add(overlay_id)
        try:
            self._run_removal_hook(record)
        finally:
            self._closing.discard(overlay_id)
        # The hook may have reshaped the stack; locate the record again.
        index = self._index_of(overlay_id)
        if index is None:
            return
        was_top = index == len(self._records) - 1
        del self._records[index]
        if reconcile_history:
            self._history.release(overlay_id, was_top=was_top)
        _LOG.debug("overlay_closed id=%s depth=%d", overlay_id, len(self._records))
        self._notify()

    def _close_top_from_navigation(self) -> None:
        top_id = self._top_id()
        if top_id is not None:
            self._remove(top_id, reconcile_history=False)

    def _run_removal_hook(self, record: OverlayRecord) -> None:
        # Confirm callbacks belong to the buttons, never to removal.
        if record.kind == "custom":
            hook = getattr(record.options, "on_close", None)
        elif record.kind == "alert":
            hook = getattr(record.options, "on_confirm", None)
        else:
            hook = None
        if hook is not None:
            call_isolated(_LOG, f"overlay_{record.kind}_removal_hook", hook)

    def _with_defaults(self, kind: OverlayKind, options: OverlayOptions) -> OverlayOptions:
        stack = self._config.stack
        labels = self._config.labels
        merged = replace(
            options,
            close_on_backdrop=(
                stack.close_on_backdrop if options.close_on_backdrop is None else options.close_on_backdrop
            ),
            close_on_esc=stack.close_on_esc if options.close_on_esc is None else options.close_on_esc,
        )
        if kind == "alert" and isinstance(merged, AlertOptions):
            return replace(
                merged,
                confirm_text=merged.confirm_text or labels.alert_confirm_text,
                tone=merged.tone or "info",
            )
        if kind == "confirm" and isinstance(merged, ConfirmOptions):
            return replace(
                merged,
                confirm_text=merged.confirm_text or labels.confirm_confirm_text,
                cancel_text=merged.cancel_text or labels.confirm_cancel_text,
                tone=merged.tone or "info",
            )
        return merged

    def _index_of(self, overlay_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == overlay_id:
                return index
        return None

    def _top_id(self) -> str | None:
        return self._records[-1].id if self._records else None

    def _notify(self) -> None:
        self._observers.publish(self.get_all())


OverlayStoreImpl = RuntimeOverlayStore
