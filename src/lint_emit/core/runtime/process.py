# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; commands are passed as argument
# lists and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Any


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options.

    ``text=False`` returns raw bytes, leaving newline handling to the caller.
    """

    cwd: Path | None = None
    capture_output: bool = False
    text: bool = True
    timeout: float | None = None
    discard_stdin: bool = False


class CommandTimeoutError(RuntimeError):
    """Raised when a subprocess does not finish within its timeout."""

    def __init__(self, command: Sequence[str], timeout: float, stdout: str | None) -> None:
        super().__init__(f"Command '{command[0]}' timed out after {timeout:.1f}s")
        self.command = tuple(command)
        self.timeout = timeout
        self.stdout = stdout


def _ensure_text(value: str | bytes | None) -> str | None:
    """Return ``value`` decoded to text when supplied as ``bytes``."""

    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose first entry is an executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be located.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute() or head_path.parent != Path():
        if not head_path.exists():
            raise FileNotFoundError(f"Executable '{head}' does not exist")
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[Any]:
    """Execute ``args`` after normalising the executable path.

    The exit status is returned, never raised; callers decide what a
    non-zero status means.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        PermissionError: If the executable cannot be run.
        CommandTimeoutError: When the process exceeds ``options.timeout``.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()

    try:
        return subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            check=False,
            capture_output=resolved_options.capture_output,
            text=resolved_options.text,
            errors="replace" if resolved_options.text else None,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandTimeoutError(
            normalized,
            resolved_options.timeout or 0.0,
            _ensure_text(exc.stdout),
        ) from exc


__all__ = [
    "CommandOptions",
    "CommandTimeoutError",
    "run_command",
]
