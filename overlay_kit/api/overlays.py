"""Public overlay-stack API contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from overlay_kit.api.history import HistoryPlatform
    from overlay_kit.runtime.config import OverlayConfig

OverlayKind = Literal["alert", "confirm", "custom"]
OVERLAY_KINDS: tuple[OverlayKind, ...] = ("alert", "confirm", "custom")

AlertTone = Literal["info", "success", "warning", "error"]
ConfirmTone = Literal["info", "warning", "danger"]

OverlayCallback = Callable[[], None]
Unsubscribe = Callable[[], None]


class OverlayComponent(Protocol):
    """Opaque caller-supplied presentation unit for custom overlays."""


@dataclass(frozen=True, slots=True)
class OverlayOptions:
    """Options shared by every overlay kind.

    Dismiss flags left as ``None`` resolve to the kind defaults when the
    overlay is opened.
    """

    id: str | None = None
    title: str | None = None
    close_on_backdrop: bool | None = None
    close_on_esc: bool | None = None
    class_name: str | None = None
    z_index: int | None = None


@dataclass(frozen=True, slots=True)
class AlertOptions(OverlayOptions):
    """Single-acknowledgement dialog."""

    message: str = ""
    confirm_text: str | None = None
    tone: AlertTone | None = None
    on_confirm: OverlayCallback | None = None


@dataclass(frozen=True, slots=True)
class ConfirmOptions(OverlayOptions):
    """Two-action confirmation dialog."""

    message: str = ""
    confirm_text: str | None = None
    cancel_text: str | None = None
    tone: ConfirmTone | None = None
    on_confirm: OverlayCallback | None = None
    on_cancel: OverlayCallback | None = None


@dataclass(frozen=True, slots=True)
class CustomOptions(OverlayOptions):
    """Caller-rendered dialog with opaque props."""

    component: OverlayComponent | None = None
    props: Mapping[str, object] = field(default_factory=dict)
    on_close: OverlayCallback | None = None


@dataclass(frozen=True, slots=True)
class OverlayRecord:
    """One active overlay. Immutable after creation."""

    id: str
    kind: OverlayKind
    options: OverlayOptions
    visible: bool = True
    created_at: float = 0.0


OverlayObserver = Callable[[tuple[OverlayRecord, ...]], None]


class OverlayStore(ABC):
    """Public overlay stack contract."""

    @abstractmethod
    def open(self, kind: OverlayKind, options: OverlayOptions) -> str:
        """Append one overlay and return its id."""

    @abstractmethod
    def alert(self, options: AlertOptions) -> str:
        """Open an alert overlay."""

    @abstractmethod
    def confirm(self, options: ConfirmOptions) -> str:
        """Open a confirm overlay."""

    @abstractmethod
    def custom(self, options: CustomOptions) -> str:
        """Open a custom overlay."""

    @abstractmethod
    def close(self, overlay_id: str) -> None:
        """Close one overlay by id; no-op when absent."""

    @abstractmethod
    def close_top(self) -> None:
        """Close the topmost overlay; no-op when empty."""

    @abstractmethod
    def close_all(self) -> None:
        """Close every overlay with a single notification."""

    @abstractmethod
    def get_all(self) -> tuple[OverlayRecord, ...]:
        """Return bottom-first snapshot."""

    @abstractmethod
    def get(self, overlay_id: str) -> OverlayRecord | None:
        """Return active record by id."""

    @abstractmethod
    def top(self) -> OverlayRecord | None:
        """Return topmost record."""

    @abstractmethod
    def subscribe(self, observer: OverlayObserver) -> Unsubscribe:
        """Register observer, sync it immediately, return de-registration."""

    @abstractmethod
    def destroy(self) -> None:
        """Close all, drop observers and detach history."""


def create_overlay_store(
    *,
    config: "OverlayConfig | None" = None,
    history: "HistoryPlatform | None" = None,
) -> OverlayStore:
    """Create default overlay store implementation."""
    from overlay_kit.runtime.overlay_store import RuntimeOverlayStore

    return RuntimeOverlayStore(config=config, history=history)
