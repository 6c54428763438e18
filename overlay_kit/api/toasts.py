"""Public toast-notification API contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from overlay_kit.runtime.config import OverlayConfig

ToastKind = Literal["success", "error", "warning", "info"]


@dataclass(frozen=True, slots=True)
class ToastItem:
    """One transient notification."""

    id: str
    message: str
    kind: ToastKind = "info"
    duration_seconds: float = 3.0


ToastListener = Callable[[tuple[ToastItem, ...]], None]


class ToastManager(Protocol):
    """Ordered toast list with auto-dismiss."""

    def add(
        self, message: str, kind: ToastKind = "info", duration_seconds: float | None = None
    ) -> str:
        """Show a toast and return its id."""

    def success(self, message: str, duration_seconds: float | None = None) -> str: ...

    def error(self, message: str, duration_seconds: float | None = None) -> str: ...

    def warning(self, message: str, duration_seconds: float | None = None) -> str: ...

    def info(self, message: str, duration_seconds: float | None = None) -> str: ...

    def remove(self, toast_id: str) -> None:
        """Dismiss one toast; no-op when absent."""

    def clear(self) -> None:
        """Dismiss every toast."""

    def items(self) -> tuple[ToastItem, ...]:
        """Return oldest-first snapshot."""

    def advance(self, delta_seconds: float) -> int:
        """Advance the dismiss clock and return expired toast count."""

    def subscribe(self, listener: ToastListener) -> Callable[[], None]:
        """Register listener, sync it immediately, return de-registration."""


def create_toast_manager(*, config: "OverlayConfig | None" = None) -> ToastManager:
    """Create default toast manager implementation."""
    from overlay_kit.runtime.toasts import RuntimeToastManager

    return RuntimeToastManager(config=config)
