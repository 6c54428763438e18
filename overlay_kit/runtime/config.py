"""Centralized configuration ownership for overlay coordination."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Mapping

from overlay_kit.api.history import DEFAULT_STATE_KEY


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    enabled: bool = True
    state_key: str = DEFAULT_STATE_KEY


@dataclass(frozen=True, slots=True)
class StackConfig:
    base_z_index: int = 1000
    close_on_backdrop: bool = True
    close_on_esc: bool = True


@dataclass(frozen=True, slots=True)
class LabelConfig:
    alert_confirm_text: str = "OK"
    confirm_confirm_text: str = "Confirm"
    confirm_cancel_text: str = "Cancel"


@dataclass(frozen=True, slots=True)
class ToastConfig:
    default_duration_seconds: float = 3.0


@dataclass(frozen=True, slots=True)
class OverlayConfig:
    history: HistoryConfig = field(default_factory=HistoryConfig)
    stack: StackConfig = field(default_factory=StackConfig)
    labels: LabelConfig = field(default_factory=LabelConfig)
    toasts: ToastConfig = field(default_factory=ToastConfig)


_OVERLAY_CONFIG: ContextVar[OverlayConfig | None] = ContextVar("overlay_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(name: str, default: int, *, env: Mapping[str, str] | None = None) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        return int(default)
    try:
        return int(raw.strip())
    except ValueError:
        return int(default)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def load_overlay_config(*, env: Mapping[str, str] | None = None) -> OverlayConfig:
    return OverlayConfig(
        history=HistoryConfig(
            enabled=_flag("OVERLAY_HISTORY_ENABLED", True, env=env),
            state_key=_text("OVERLAY_HISTORY_STATE_KEY", DEFAULT_STATE_KEY, env=env),
        ),
        stack=StackConfig(
            base_z_index=_int("OVERLAY_BASE_Z_INDEX", 1000, env=env),
            close_on_backdrop=_flag("OVERLAY_CLOSE_ON_BACKDROP", True, env=env),
            close_on_esc=_flag("OVERLAY_CLOSE_ON_ESC", True, env=env),
        ),
        labels=LabelConfig(
            alert_confirm_text=_text("OVERLAY_ALERT_CONFIRM_TEXT", "OK", env=env),
            confirm_confirm_text=_text("OVERLAY_CONFIRM_CONFIRM_TEXT", "Confirm", env=env),
            confirm_cancel_text=_text("OVERLAY_CONFIRM_CANCEL_TEXT", "Cancel", env=env),
        ),
        toasts=ToastConfig(
            default_duration_seconds=_float(
                "OVERLAY_TOAST_DURATION_SECONDS", 3.0, minimum=0.0, env=env
            ),
        ),
    )


def initialize_overlay_config(*, env: Mapping[str, str] | None = None) -> OverlayConfig:
    config = load_overlay_config(env=env)
    _OVERLAY_CONFIG.set(config)
    return config


def set_overlay_config(config: OverlayConfig) -> OverlayConfig:
    _OVERLAY_CONFIG.set(config)
    return config


def get_overlay_config() -> OverlayConfig:
    config = _OVERLAY_CONFIG.get()
    if config is not None:
        return config
    return initialize_overlay_config()


__all__ = [
    "HistoryConfig",
    "LabelConfig",
    "OverlayConfig",
    "StackConfig",
    "ToastConfig",
    "get_overlay_config",
    "initialize_overlay_config",
    "load_overlay_config",
    "set_overlay_config",
]
