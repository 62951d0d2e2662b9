# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide which (linter, file) pairs a run must execute."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..config import LinterConfig


@dataclass(frozen=True, slots=True)
class ScheduledInvocation:
    """One linter applied to one changed file, with its position in the plan."""

    order: int
    linter: LinterConfig
    file: str


def plan_invocations(linters: Sequence[LinterConfig], files: Iterable[str]) -> list[ScheduledInvocation]:
    """Return the invocations for every linter whose extensions cover a changed file.

    The plan is ordered by file and then by linter name so that scheduling
    and failure reporting are stable between runs.

    Args:
        linters: Linters selected for the run.
        files: Repository-relative paths of files with added lines.

    Returns:
        list[ScheduledInvocation]: Ordered, numbered invocation plan.
    """

    ordered_linters = sorted(linters, key=lambda linter: linter.name)
    pairs = [(file, linter) for file in sorted(set(files)) for linter in ordered_linters if linter.applies_to(file)]
    return [ScheduledInvocation(order=index, linter=linter, file=file) for index, (file, linter) in enumerate(pairs)]


__all__ = ["ScheduledInvocation", "plan_invocations"]
