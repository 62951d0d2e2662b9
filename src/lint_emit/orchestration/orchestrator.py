# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fan linters out over changed files and assemble the final report."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from textwrap import shorten

from ..config import LinterConfig
from ..correlation import Correlator
from ..execution.runner import ToolRunner
from ..models import ChangedRangeMap, FailureKind, InvocationResult, Issue, RunResult, ToolFailure
from ..parsers.pattern import PatternMatcher
from .tool_selection import ScheduledInvocation, plan_invocations

LOGGER = logging.getLogger(__name__)

InvocationHook = Callable[[ScheduledInvocation, InvocationResult], None]


@dataclass(slots=True)
class _Collected:
    """Per-run accumulator, only touched from the coordinating thread."""

    issues: dict[tuple[str, int, str, str], Issue] = field(default_factory=dict)
    failures: list[ToolFailure] = field(default_factory=list)


@dataclass(slots=True)
class Orchestrator:
    """Run every applicable (linter, file) pair and correlate the results.

    Invocations share nothing but the read-only configuration and changed
    range map, so they run on a bounded thread pool. Results are collected
    first and sorted afterwards; completion order never leaks into the report.
    """

    tool_runner: ToolRunner
    jobs: int = 1
    after_invocation: InvocationHook | None = None

    def plan(self, linters: Sequence[LinterConfig], ranges: ChangedRangeMap) -> list[ScheduledInvocation]:
        """Return the invocation plan for ``linters`` over the files in ``ranges``."""

        return plan_invocations(linters, (path for path, changed in ranges.items() if len(changed)))

    def run(self, linters: Sequence[LinterConfig], ranges: ChangedRangeMap) -> RunResult:
        """Execute the plan and return the sorted report.

        Args:
            linters: Linters selected for this run.
            ranges: Changed-line map produced by the diff engine.

        Returns:
            RunResult: Surviving issues ordered by file, line and tool, plus
            per-tool failures.
        """

        scheduled = self.plan(linters, ranges)
        LOGGER.info("scheduling %d invocation(s) across %d worker(s)", len(scheduled), self.jobs)
        results = self._execute(scheduled)

        correlator = Correlator(ranges=ranges, root=self.tool_runner.root)
        matchers = {linter.name: PatternMatcher.for_linter(linter) for linter in linters}
        collected = _Collected()
        for invocation in scheduled:
            self._absorb(invocation, results[invocation.order], matchers[invocation.linter.name], correlator, collected)

        issues = sorted(collected.issues.values(), key=Issue.sort_key)
        failures = sorted(collected.failures, key=ToolFailure.sort_key)
        return RunResult(
            issues=tuple(issues),
            failures=tuple(failures),
            files=tuple(sorted(ranges)),
            invocations=len(scheduled),
        )

    def _execute(self, scheduled: Sequence[ScheduledInvocation]) -> dict[int, InvocationResult]:
        """Run ``scheduled`` invocations, in parallel when more than one job is allowed."""

        results: dict[int, InvocationResult] = {}
        if self.jobs > 1 and len(scheduled) > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as executor:
                future_map = {
                    executor.submit(self.tool_runner.run, item.linter, item.file): item for item in scheduled
                }
                for future in as_completed(future_map):
                    item = future_map[future]
                    results[item.order] = future.result()
                    self._notify(item, results[item.order])
        else:
            for item in scheduled:
                results[item.order] = self.tool_runner.run(item.linter, item.file)
                self._notify(item, results[item.order])
        return results

    def _notify(self, item: ScheduledInvocation, result: InvocationResult) -> None:
        if self.after_invocation is not None:
            self.after_invocation(item, result)

    @staticmethod
    def _absorb(
        invocation: ScheduledInvocation,
        result: InvocationResult,
        matcher: PatternMatcher,
        correlator: Correlator,
        collected: _Collected,
    ) -> None:
        """Parse and correlate one invocation result into ``collected``."""

        if result.failure is not None:
            collected.failures.append(result.failure)
            return
        output = result.output or ""
        summary = matcher.extract(output, default_file=invocation.file)
        if result.returncode and summary.matched == 0:
            collected.failures.append(
                ToolFailure(
                    tool=invocation.linter.name,
                    file=invocation.file,
                    kind=FailureKind.EXIT_STATUS,
                    detail=_exit_detail(result.returncode, output),
                )
            )
            return
        for issue in correlator.filter(invocation.linter.name, summary.issues):
            collected.issues.setdefault(issue.sort_key(), issue)


def _exit_detail(returncode: int, output: str) -> str:
    """Describe a non-zero exit that produced nothing the pattern could read."""

    for raw_line in reversed(output.splitlines()):
        hint = raw_line.strip()
        if hint:
            return f"exited {returncode} without parseable output: {shorten(hint, width=160, placeholder='…')}"
    return f"exited {returncode} without output"


__all__ = ["InvocationHook", "Orchestrator"]
