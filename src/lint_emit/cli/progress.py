# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Terminal progress feedback while linters run."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from ..models import InvocationResult
from ..orchestration.tool_selection import ScheduledInvocation


class InvocationProgress:
    """Advance a Rich progress bar as (linter, file) invocations complete.

    When ``enabled`` is false every method is a no-op, so callers can install
    the hook unconditionally.
    """

    def __init__(self, *, total: int, console: Console, enabled: bool) -> None:
        self._enabled = enabled and total > 0
        self._progress: Progress | None = None
        self._task_id = None
        self._total = total
        self._console = console

    def __enter__(self) -> InvocationProgress:
        if self._enabled:
            self._progress = Progress(
                TextColumn("[bold blue]linting"),
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                TextColumn("{task.description}"),
                console=self._console,
                transient=True,
            )
            self._progress.start()
            self._task_id = self._progress.add_task("", total=self._total)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def advance(self, invocation: ScheduledInvocation, result: InvocationResult) -> None:
        """Record one finished invocation."""

        if self._progress is None or self._task_id is None:
            return
        marker = "[red]✗[/red]" if result.failed else "[green]✓[/green]"
        self._progress.update(
            self._task_id,
            advance=1,
            description=f"{marker} {escape(invocation.linter.name)} {escape(invocation.file)}",
        )


__all__ = ["InvocationProgress"]
