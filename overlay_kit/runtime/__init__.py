"""Overlay runtime services."""

from overlay_kit.api.events import Subscription
from overlay_kit.api.logging import LoggingConfig
from overlay_kit.runtime.channel import RuntimeChangeChannel
from overlay_kit.runtime.config import (
    HistoryConfig,
    LabelConfig,
    OverlayConfig,
    StackConfig,
    ToastConfig,
    get_overlay_config,
    initialize_overlay_config,
    load_overlay_config,
    set_overlay_config,
)
from overlay_kit.runtime.context import OverlayContext, build_overlay_context
from overlay_kit.runtime.history_bridge import RuntimeHistoryBridge
from overlay_kit.runtime.history_platform import HistoryEntry, InMemoryHistory
from overlay_kit.runtime.interactions import OverlayInteractions, OverlayLayer
from overlay_kit.runtime.logging import (
    JsonFormatter,
    configure_overlay_logging,
    load_logging_config,
    setup_overlay_logging,
    shutdown_overlay_logging,
)
from overlay_kit.runtime.overlay_store import RuntimeOverlayStore
from overlay_kit.runtime.timers import DismissTimers
from overlay_kit.runtime.toasts import RuntimeToastManager

__all__ = [
    "DismissTimers",
    "HistoryConfig",
    "HistoryEntry",
    "InMemoryHistory",
    "JsonFormatter",
    "LabelConfig",
    "LoggingConfig",
    "OverlayConfig",
    "OverlayContext",
    "OverlayInteractions",
    "OverlayLayer",
    "RuntimeChangeChannel",
    "RuntimeHistoryBridge",
    "RuntimeOverlayStore",
    "RuntimeToastManager",
    "StackConfig",
    "Subscription",
    "ToastConfig",
    "build_overlay_context",
    "configure_overlay_logging",
    "get_overlay_config",
    "initialize_overlay_config",
    "load_logging_config",
    "load_overlay_config",
    "set_overlay_config",
    "setup_overlay_logging",
    "shutdown_overlay_logging",
]
