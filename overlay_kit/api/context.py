"""Public composition-context API."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from overlay_kit.api.history import HistoryPlatform
    from overlay_kit.api.logging import LoggingConfig
    from overlay_kit.runtime.config import OverlayConfig
    from overlay_kit.runtime.context import OverlayContext


def create_overlay_context(
    *,
    config: "OverlayConfig | None" = None,
    history: "HistoryPlatform | None" = None,
    log_config: "LoggingConfig | None" = None,
) -> "OverlayContext":
    """Create one application-scoped overlay context.

    The context replaces global singletons: build it once at startup and hand
    it to whichever component shows dialogs or toasts. Passing `log_config`
    installs that logging pipeline; otherwise an env-driven one is installed
    only when nothing has configured logging yet.
    """
    from overlay_kit.runtime.context import build_overlay_context

    return build_overlay_context(config=config, history=history, log_config=log_config)
