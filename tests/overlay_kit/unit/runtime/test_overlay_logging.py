from __future__ import annotations

import json
import logging
from logging.handlers import QueueHandler

from overlay_kit.api import LoggingConfig, configure_logging
from overlay_kit.runtime.logging import (
    JsonFormatter,
    configure_overlay_logging,
    load_logging_config,
    setup_overlay_logging,
    shutdown_overlay_logging,
)


def test_load_logging_config_prefers_package_prefix() -> None:
    cfg = load_logging_config(env={"LOG_LEVEL": "warning", "OVERLAY_LOG_LEVEL": "error"})
    assert cfg.level_name == "ERROR"

    cfg = load_logging_config(env={"LOG_LEVEL": "warning"})
    assert cfg.level_name == "WARNING"


def test_load_logging_config_formats_and_file() -> None:
    cfg = load_logging_config(
        env={
            "OVERLAY_LOG_FORMAT": "JSON",
            "OVERLAY_LOG_FILE": " logs/overlay.log ",
            "OVERLAY_LOG_FILE_FORMAT": "yaml",
        }
    )
    assert cfg == LoggingConfig(
        level_name="INFO",
        console_format="json",
        file_path="logs/overlay.log",
        file_format="json",
    )


def test_configure_attaches_to_package_logger_only() -> None:
    root_handlers = list(logging.getLogger().handlers)

    logger = configure_overlay_logging(LoggingConfig(level_name="DEBUG"))

    assert logger.name == "overlay_kit"
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert logging.getLogger().handlers == root_handlers


def test_configure_replaces_previous_pipeline() -> None:
    configure_overlay_logging(LoggingConfig(level_name="DEBUG"))
    logger = configure_overlay_logging(LoggingConfig(level_name="WARNING"))
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_file_output_goes_through_queue(tmp_path) -> None:
    target = tmp_path / "nested" / "overlay.log"
    logger = configure_logging(LoggingConfig(level_name="INFO", file_path=str(target)))

    assert isinstance(logger.handlers[0], QueueHandler)
    logging.getLogger("overlay_kit.runtime.overlay_store").info("overlay_opened id=%s", "a")
    shutdown_overlay_logging()

    lines = target.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["msg"] == "overlay_opened id=a"


def test_shutdown_restores_propagation() -> None:
    configure_overlay_logging(LoggingConfig())
    logger = shutdown_overlay_logging()
    assert logger.handlers == []
    assert logger.propagate is True
    assert logger.level == logging.NOTSET


def test_setup_respects_existing_root_handlers() -> None:
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    try:
        assert setup_overlay_logging(env={}) is False
        assert logging.getLogger("overlay_kit").handlers == []
    finally:
        root.removeHandler(sentinel)


def test_setup_installs_pipeline_when_unconfigured() -> None:
    root = logging.getLogger()
    saved = list(root.handlers)
    root.handlers.clear()
    try:
        assert setup_overlay_logging(env={"OVERLAY_LOG_LEVEL": "DEBUG"}) is True
        assert logging.getLogger("overlay_kit").level == logging.DEBUG
        assert setup_overlay_logging(env={}) is False
    finally:
        root.handlers.extend(saved)


def test_json_formatter_preserves_extra_fields() -> None:
    record = logging.LogRecord(
        name="overlay_kit.runtime.overlay_store",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="overlay_opened id=%s",
        args=("abc",),
        exc_info=None,
    )
    record.depth = 2

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "overlay_kit.runtime.overlay_store"
    assert payload["msg"] == "overlay_opened id=abc"
    assert payload["fields"] == {"depth": 2}
