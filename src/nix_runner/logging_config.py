# nix_runner/logging_config.py
"""
Opt-in logging setup for nix_runner.

The library only creates loggers; nothing is printed unless an application
calls setup_logging() or configures the root logger itself.
"""

from __future__ import annotations

import logging
from typing import Literal

PACKAGE_LOGGER = "nix_runner"

FORMATS = {
    "simple": "%(levelname)s %(name)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s",
}

_HANDLER_NAME = "nix_runner.console"


def setup_logging(
    level: int | str = "WARNING",
    *,
    format: Literal["simple", "detailed"] = "simple",
    format_string: str | None = None,
    propagate: bool = True,
) -> logging.Logger:
    """
    Attach a stderr handler to the nix_runner logger.

    Calling it again replaces the previous handler instead of adding another.

    Args:
        level: Logging level name or number
        format: Named format preset, ignored when format_string is given
        format_string: Custom logging format string
        propagate: Whether records also reach the root logger
    """
    if format_string is None:
        if format not in FORMATS:
            raise ValueError(f"Unknown log format {format!r}; expected one of {sorted(FORMATS)}")
        format_string = FORMATS[format]

    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_handler(logger)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = propagate
    return logger


def disable_logging() -> None:
    """Silence all nix_runner logging (useful in tests and embedding apps)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_handler(logger)
    logger.setLevel(logging.CRITICAL + 1)
    logger.propagate = False


def _remove_handler(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
