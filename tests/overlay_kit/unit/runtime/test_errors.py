from __future__ import annotations

import logging

from overlay_kit.runtime.errors import call_isolated, log_recoverable


def _boom(value: int) -> None:
    raise RuntimeError(f"boom {value}")


def test_call_isolated_returns_true_on_success() -> None:
    seen: list[int] = []
    logger = logging.getLogger("overlay_kit.tests.errors")
    assert call_isolated(logger, "probe", seen.append, 3) is True
    assert seen == [3]


def test_call_isolated_logs_and_contains_failure(caplog) -> None:
    logger = logging.getLogger("overlay_kit.tests.errors")
    with caplog.at_level(logging.WARNING, logger="overlay_kit.tests.errors"):
        assert call_isolated(logger, "probe", _boom, 1) is False

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.getMessage().startswith("probe_failed callback=")
    assert record.exc_info is not None


def test_log_recoverable_uses_requested_level(caplog) -> None:
    logger = logging.getLogger("overlay_kit.tests.errors")
    with caplog.at_level(logging.DEBUG, logger="overlay_kit.tests.errors"):
        try:
            raise ValueError("bad")
        except ValueError:
            log_recoverable(logger, "probe_tolerated id=%s", "x", level=logging.ERROR)

    assert caplog.records[-1].levelno == logging.ERROR
    assert caplog.records[-1].getMessage() == "probe_tolerated id=x"
