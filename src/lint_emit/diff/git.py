# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compute changed line sets for a git commit range."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from ..core.runtime.process import CommandOptions, run_command
from ..models import ChangedRange
from .hunks import parse_unified_diff

LOGGER = logging.getLogger(__name__)

DEFAULT_RANGE: Final[str] = "HEAD"
DIFF_FLAGS: Final[tuple[str, ...]] = (
    "--no-color",
    "--no-ext-diff",
    "--no-textconv",
    "--unified=0",
    "--find-renames",
    "--src-prefix=a/",
    "--dst-prefix=b/",
)

GitRunner = Callable[[Sequence[str], Path], CompletedProcess[str]]


class GitError(RuntimeError):
    """Raised when git cannot produce a diff for the requested range."""


def _decode(value: bytes | None) -> str:
    return (value or b"").decode("utf-8", errors="replace")


def _default_runner(cmd: Sequence[str], cwd: Path) -> CompletedProcess[str]:
    """Run a git command without raising on failure.

    Output is read as bytes and decoded here: universal-newline translation
    would turn a bare ``\\r`` inside an added line into a line break.
    """

    completed = run_command(
        cmd,
        options=CommandOptions(cwd=cwd, capture_output=True, text=False, discard_stdin=True),
    )
    return CompletedProcess(
        completed.args,
        completed.returncode,
        stdout=_decode(completed.stdout),
        stderr=_decode(completed.stderr),
    )


class GitDiffEngine:
    """Derive per-file :class:`ChangedRange` entries from ``git diff``."""

    def __init__(self, *, runner: GitRunner | None = None) -> None:
        """Create a diff engine.

        Args:
            runner: Optional command runner used to execute git commands. The
                default shells out through :func:`run_command`.
        """

        self._runner = runner or _default_runner

    def repository_root(self, cwd: Path) -> Path:
        """Return the top level of the working tree containing ``cwd``.

        Raises:
            GitError: If ``cwd`` is not inside a git working tree.
        """

        completed = self._git(["rev-parse", "--show-toplevel"], cwd)
        top = completed.stdout.strip()
        if not top:
            raise GitError(f"{cwd} is not inside a git working tree")
        return Path(top).resolve()

    @staticmethod
    def diff_command(commit_range: str | None) -> list[str]:
        """Return the ``git diff`` argv for ``commit_range``.

        ``A..B`` and ``A...B`` are passed through, a single ref compares the
        working tree against it, and ``None`` compares against ``HEAD``.

        Raises:
            GitError: If the range looks like a command-line option.
        """

        target = (commit_range or "").strip() or DEFAULT_RANGE
        if target.startswith("-"):
            raise GitError(f"Invalid commit range {target!r}")
        return ["git", "diff", *DIFF_FLAGS, target, "--"]

    def changed_ranges(self, commit_range: str | None, root: Path) -> dict[str, ChangedRange]:
        """Return the changed-line map for ``commit_range``.

        Args:
            commit_range: Range expression, single ref, or ``None`` for ``HEAD``.
            root: Repository top level; keys are POSIX paths relative to it.

        Returns:
            dict[str, ChangedRange]: Files with at least one added line.

        Raises:
            GitError: If git rejects the range or the directory is not a repository.
        """

        cmd = self.diff_command(commit_range)
        LOGGER.debug("running %s in %s", " ".join(cmd), root)
        completed = self._git(cmd[1:], root)
        ranges = parse_unified_diff(completed.stdout)
        LOGGER.info("%d file(s) with added lines in %s", len(ranges), commit_range or DEFAULT_RANGE)
        for path, changed in ranges.items():
            LOGGER.debug("changed %s: lines %s", path, list(changed.lines))
        return ranges

    def _git(self, args: Sequence[str], cwd: Path) -> CompletedProcess[str]:
        cmd = ["git", *args]
        try:
            completed = self._runner(cmd, cwd)
        except FileNotFoundError as exc:
            raise GitError("git executable not found on PATH") from exc
        except OSError as exc:
            raise GitError(f"unable to run git: {exc}") from exc
        if completed.returncode != 0:
            detail = (completed.stderr or "").strip() or f"exit status {completed.returncode}"
            raise GitError(f"git {' '.join(args[:1])} failed: {detail}")
        return completed


__all__ = ["DEFAULT_RANGE", "GitDiffEngine", "GitError", "GitRunner"]
