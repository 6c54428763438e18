"""Overlay stack coordination, history integration and toasts."""

from overlay_kit.api.context import create_overlay_context

__all__ = ["create_overlay_context"]
