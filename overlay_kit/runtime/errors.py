"""Shared runtime exception policy helpers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import ParamSpec

P = ParamSpec("P")


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *args: object,
    level: int = logging.WARNING,
) -> None:
    """Emit observability for tolerated caller-code exceptions."""
    logger.log(level, message, *args, exc_info=True)


def call_isolated(
    logger: logging.Logger,
    label: str,
    callback: Callable[P, object],
    *args: P.args,
    **kwargs: P.kwargs,
) -> bool:
    """Invoke caller-supplied code, logging instead of propagating failures.

    Returns whether the callback completed without raising.
    """
    try:
        callback(*args, **kwargs)
    except Exception:  # pylint: disable=broad-exception-caught
        log_recoverable(logger, "%s_failed callback=%r", label, callback)
        return False
    return True
