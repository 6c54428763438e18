"""Public logging API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    import logging

LogFormat = Literal["text", "json"]
PACKAGE_LOGGER_NAME = "overlay_kit"


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: LogFormat = "text"
    file_path: str | None = None
    file_format: LogFormat = "json"


def configure_logging(config: LoggingConfig) -> "logging.Logger":
    """Install the overlay_kit logging pipeline and return the package logger."""
    from overlay_kit.runtime.logging import configure_overlay_logging

    return configure_overlay_logging(config)


def setup_logging() -> bool:
    """Install an env-driven pipeline unless logging is already configured."""
    from overlay_kit.runtime.logging import setup_overlay_logging

    return setup_overlay_logging()
