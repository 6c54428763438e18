"""Toast notification manager."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

from overlay_kit.api.toasts import ToastItem, ToastKind, ToastListener
from overlay_kit.runtime.channel import RuntimeChangeChannel
from overlay_kit.runtime.config import OverlayConfig, get_overlay_config
from overlay_kit.runtime.timers import DismissTimers

_LOG = logging.getLogger("overlay_kit.runtime.toasts")


class RuntimeToastManager:
    """Oldest-first toast list; positive durations auto-dismiss on `advance`."""

    def __init__(self, *, config: OverlayConfig | None = None) -> None:
        self._config = config if config is not None else get_overlay_config()
        self._toasts: list[ToastItem] = []
        self._timers = DismissTimers(self.remove)
        self._listeners: RuntimeChangeChannel[tuple[ToastItem, ...]] = RuntimeChangeChannel(
            name="toast"
        )

    @property
    def timers(self) -> DismissTimers:
        return self._timers

    def add(
        self, message: str, kind: ToastKind = "info", duration_seconds: float | None = None
    ) -> str:
        duration = (
            self._config.toasts.default_duration_seconds
            if duration_seconds is None
            else float(duration_seconds)
        )
        toast = ToastItem(id=str(uuid.uuid4()), message=message, kind=kind, duration_seconds=duration)
        self._toasts.append(toast)
        if duration > 0.0:
            self._timers.arm(toast.id, duration)
        _LOG.debug("toast_added id=%s kind=%s duration=%.2f", toast.id, kind, duration)
        self._notify()
        return toast.id

    def success(self, message: str, duration_seconds: float | None = None) -> str:
        return self.add(message, "success", duration_seconds)

    def error(self, message: str, duration_seconds: float | None = None) -> str:
        return self.add(message, "error", duration_seconds)

    def warning(self, message: str, duration_seconds: float | None = None) -> str:
        return self.add(message, "warning", duration_seconds)

    def info(self, message: str, duration_seconds: float | None = None) -> str:
        return self.add(message, "info", duration_seconds)

    def remove(self, toast_id: str) -> None:
        remaining = [toast for toast in self._toasts if toast.id != toast_id]
        if len(remaining) == len(self._toasts):
            return
        self._toasts = remaining
        self._timers.cancel(toast_id)
        _LOG.debug("toast_removed id=%s", toast_id)
        self._notify()

    def clear(self) -> None:
        self._timers.cancel_all()
        if not self._toasts:
            return
        self._toasts = []
        self._notify()

    def items(self) -> tuple[ToastItem, ...]:
        return tuple(self._toasts)

    def advance(self, delta_seconds: float) -> int:
        """Advance the dismiss clock; each expiry notifies on its own."""
        return self._timers.advance(delta_seconds)

    def subscribe(self, listener: ToastListener) -> Callable[[], None]:
        subscription = self._listeners.subscribe(listener)
        self._listeners.deliver(subscription, self.items())

        def unsubscribe() -> None:
            self._listeners.unsubscribe(subscription)

        return unsubscribe

    def shutdown(self) -> None:
        self.clear()
        self._listeners.clear()

    def _notify(self) -> None:
        self._listeners.publish(self.items())


ToastManager = RuntimeToastManager
