"""Overlay context implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from overlay_kit.api.history import HistoryPlatform
from overlay_kit.api.logging import LoggingConfig
from overlay_kit.runtime.config import OverlayConfig, get_overlay_config
from overlay_kit.runtime.interactions import OverlayInteractions
from overlay_kit.runtime.logging import configure_overlay_logging, setup_overlay_logging
from overlay_kit.runtime.overlay_store import RuntimeOverlayStore
from overlay_kit.runtime.toasts import RuntimeToastManager

_LOG = logging.getLogger("overlay_kit.runtime.context")


@dataclass(frozen=True, slots=True)
class OverlayContext:
    """Owned overlay services for one application instance."""

    config: OverlayConfig
    store: RuntimeOverlayStore
    interactions: OverlayInteractions
    toasts: RuntimeToastManager
    history: HistoryPlatform | None = None

    def advance(self, delta_seconds: float) -> int:
        """Drive time-based behavior from the host event loop."""
        return self.toasts.advance(delta_seconds)

    def shutdown(self) -> None:
        """Close every overlay and toast and drop all observers."""
        self.store.destroy()
        self.toasts.shutdown()
        _LOG.debug("overlay_context_shutdown")


def build_overlay_context(
    *,
    config: OverlayConfig | None = None,
    history: HistoryPlatform | None = None,
    log_config: LoggingConfig | None = None,
) -> OverlayContext:
    if log_config is not None:
        configure_overlay_logging(log_config)
    else:
        setup_overlay_logging()
    resolved = config if config is not None else get_overlay_config()
    store = RuntimeOverlayStore(config=resolved, history=history)
    _LOG.debug("overlay_context_built history=%s", history is not None and resolved.history.enabled)
    return OverlayContext(
        config=resolved,
        store=store,
        interactions=OverlayInteractions(store),
        toasts=RuntimeToastManager(config=resolved),
        history=history,
    )
