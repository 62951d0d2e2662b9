# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing status helpers and verbosity-driven diagnostic logging."""

from __future__ import annotations

import logging
import sys
from typing import Final

from rich.text import Text

from ..console import detect_tty, get_console_manager

PACKAGE_LOGGER: Final[str] = "lint_emit"

_VERBOSITY_LEVELS: Final[tuple[int, ...]] = (
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Render ``msg`` on standard error using the shared console.

    Args:
        msg: Message text to print.
        style: Rich style name to apply when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji, stderr=True)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` count onto a :mod:`logging` level.

    Args:
        verbosity: Number of times ``--verbose`` was supplied.

    Returns:
        int: ``ERROR`` for zero, then ``WARNING``, ``INFO`` and ``DEBUG``.
    """

    index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


def configure_logging(verbosity: int) -> logging.Logger:
    """Attach a stderr handler to the package logger at the requested verbosity.

    Args:
        verbosity: Number of times ``--verbose`` was supplied.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    handler: logging.StreamHandler | None = getattr(logger, "_lint_emit_handler", None)
    if handler is None:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
        setattr(logger, "_lint_emit_handler", handler)
    else:
        # stderr may have been swapped since the last run (e.g. by a test runner)
        handler.setStream(sys.stderr)
    logger.setLevel(level_for_verbosity(verbosity))
    return logger


__all__ = [
    "configure_logging",
    "emoji",
    "fail",
    "level_for_verbosity",
    "ok",
    "warn",
]
