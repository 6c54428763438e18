"""Package logging pipeline for overlay_kit.

Handlers attach to the ``overlay_kit`` package logger, never the root logger,
so a host's own logging setup is left alone. Once handlers are attached the
package logger stops propagating; ``shutdown_overlay_logging`` restores it.
"""

from __future__ import annotations

import json
import logging
import os
import queue
from collections.abc import Mapping
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from overlay_kit.api.logging import PACKAGE_LOGGER_NAME, LogFormat, LoggingConfig

_QUEUE_LISTENER: QueueListener | None = None
_TEXT_PATTERN = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_STANDARD_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys() | {"message", "asctime"}
)


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


def load_logging_config(*, env: Mapping[str, str] | None = None) -> LoggingConfig:
    """Build logging settings from ``OVERLAY_LOG_*`` variables."""
    source: Mapping[str, str] = os.environ if env is None else env
    level = source.get("OVERLAY_LOG_LEVEL") or source.get("LOG_LEVEL") or "INFO"
    file_path = (source.get("OVERLAY_LOG_FILE") or "").strip() or None
    return LoggingConfig(
        level_name=level.strip().upper(),
        console_format=_format_name(source.get("OVERLAY_LOG_FORMAT"), "text"),
        file_path=file_path,
        file_format=_format_name(source.get("OVERLAY_LOG_FILE_FORMAT"), "json"),
    )


def configure_overlay_logging(config: LoggingConfig) -> logging.Logger:
    """Replace the package logger's handlers with the configured pipeline."""
    global _QUEUE_LISTENER

    logger = shutdown_overlay_logging()
    logger.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_formatter_for(config.console_format))
    if not config.file_path:
        logger.addHandler(console)
    else:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_formatter_for(config.file_format))
        # File writes go through a queue so overlay callbacks never block on disk.
        records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        logger.addHandler(QueueHandler(records))
        _QUEUE_LISTENER = QueueListener(records, console, file_handler, respect_handler_level=True)
        _QUEUE_LISTENER.start()
    logger.propagate = False
    logger.debug(
        "overlay_logging_configured level=%s console=%s file=%s",
        config.level_name,
        config.console_format,
        config.file_path,
    )
    return logger


def setup_overlay_logging(*, env: Mapping[str, str] | None = None) -> bool:
    """Configure from the environment unless the host already handles logging.

    Returns whether a pipeline was installed.
    """
    if logging.getLogger().handlers or logging.getLogger(PACKAGE_LOGGER_NAME).handlers:
        return False
    configure_overlay_logging(load_logging_config(env=env))
    return True


def shutdown_overlay_logging() -> logging.Logger:
    """Stop the queue listener and detach every package handler."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def _format_name(raw: str | None, default: LogFormat) -> LogFormat:
    value = (raw or "").strip().lower()
    if value == "json":
        return "json"
    if value == "text":
        return "text"
    return default


def _formatter_for(kind: str) -> logging.Formatter:
    if kind == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_PATTERN)
