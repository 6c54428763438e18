"""Public overlay API contracts."""

from overlay_kit.api.context import create_overlay_context
from overlay_kit.api.events import ChangeChannel, Subscription, create_change_channel
from overlay_kit.api.history import (
    DEFAULT_STATE_KEY,
    BridgeState,
    HistoryBridge,
    HistoryPlatform,
    HistoryState,
    PopListener,
    create_in_memory_history,
)
from overlay_kit.api.logging import (
    PACKAGE_LOGGER_NAME,
    LogFormat,
    LoggingConfig,
    configure_logging,
    setup_logging,
)
from overlay_kit.api.overlays import (
    OVERLAY_KINDS,
    AlertOptions,
    AlertTone,
    ConfirmOptions,
    ConfirmTone,
    CustomOptions,
    OverlayComponent,
    OverlayKind,
    OverlayObserver,
    OverlayOptions,
    OverlayRecord,
    OverlayStore,
    create_overlay_store,
)
from overlay_kit.api.toasts import ToastItem, ToastKind, ToastManager, create_toast_manager

__all__ = [
    "AlertOptions",
    "AlertTone",
    "BridgeState",
    "ChangeChannel",
    "ConfirmOptions",
    "ConfirmTone",
    "CustomOptions",
    "DEFAULT_STATE_KEY",
    "HistoryBridge",
    "HistoryPlatform",
    "HistoryState",
    "LogFormat",
    "LoggingConfig",
    "OVERLAY_KINDS",
    "OverlayComponent",
    "OverlayKind",
    "OverlayObserver",
    "OverlayOptions",
    "OverlayRecord",
    "OverlayStore",
    "PACKAGE_LOGGER_NAME",
    "PopListener",
    "Subscription",
    "ToastItem",
    "ToastKind",
    "ToastManager",
    "configure_logging",
    "create_change_channel",
    "create_in_memory_history",
    "create_overlay_context",
    "create_overlay_store",
    "create_toast_manager",
    "setup_logging",
]
