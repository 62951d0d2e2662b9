# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run one configured linter against one file."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess

from ..config import LinterConfig
from ..core.runtime.process import CommandOptions, CommandTimeoutError, run_command
from ..models import FailureKind, InvocationResult, ToolFailure

LOGGER = logging.getLogger(__name__)

CommandRunner = Callable[..., CompletedProcess[str]]


def select_output(completed: CompletedProcess[str]) -> str:
    """Return the stream a linter reported on: stdout, or stderr when stdout is blank."""

    stdout = completed.stdout or ""
    if stdout.strip():
        return stdout
    return completed.stderr or ""


@dataclass(frozen=True, slots=True)
class ToolRunner:
    """Execute a linter subprocess and capture its output as an :class:`InvocationResult`.

    A non-zero exit status is not an error by itself: linters conventionally
    exit non-zero when they report issues. Only a missing executable, a
    permission problem or a timeout produce a failure here.
    """

    root: Path
    timeout: float | None = None
    runner: CommandRunner = run_command

    def run(self, linter: LinterConfig, file: str) -> InvocationResult:
        """Run ``linter`` on ``file`` (a path relative to :attr:`root`).

        Args:
            linter: Tool definition providing command, arguments and pattern.
            file: Repository-relative POSIX path of the target file.

        Returns:
            InvocationResult: Captured output, or a failure descriptor.
        """

        target = str(self.root / file)
        cmd = linter.build_command(target)
        LOGGER.debug("%s: running %s", linter.name, shlex.join(cmd))
        options = CommandOptions(
            cwd=self.root,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            discard_stdin=True,
        )
        try:
            completed = self.runner(cmd, options=options)
        except FileNotFoundError as exc:
            return self._failure(linter, file, FailureKind.NOT_FOUND, str(exc) or f"{linter.command} not found")
        except OSError as exc:
            return self._failure(linter, file, FailureKind.PERMISSION, f"cannot execute {linter.command}: {exc}")
        except CommandTimeoutError as exc:
            return self._failure(linter, file, FailureKind.TIMEOUT, str(exc))

        output = select_output(completed)
        LOGGER.debug("%s: %s exited %s with %d byte(s) of output", linter.name, file, completed.returncode, len(output))
        return InvocationResult(tool=linter.name, file=file, output=output, returncode=completed.returncode)

    @staticmethod
    def _failure(linter: LinterConfig, file: str, kind: FailureKind, detail: str) -> InvocationResult:
        LOGGER.info("%s: %s on %s: %s", linter.name, kind.value, file, detail)
        failure = ToolFailure(tool=linter.name, file=file, kind=kind, detail=detail)
        return InvocationResult(tool=linter.name, file=file, failure=failure)


__all__ = ["CommandRunner", "ToolRunner", "select_output"]
