# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render run results for humans (text) and machines (JSON)."""

from __future__ import annotations

import json
from collections.abc import Iterable
from itertools import groupby
from typing import Any

from rich.console import Console
from rich.text import Text

from ..config import OutputConfig
from ..console import get_console_manager
from ..core.logging import ok, warn
from ..models import Issue, RunResult, ToolFailure


def result_payload(result: RunResult) -> dict[str, Any]:
    """Return the JSON-serialisable representation of ``result``."""

    return {
        "issues": [issue.model_dump(mode="json") for issue in result.issues],
        "failures": [failure.model_dump(mode="json") for failure in result.failures],
        "files": list(result.files),
        "invocations": result.invocations,
        "exit_code": result.exit_code,
    }


def render(result: RunResult, cfg: OutputConfig) -> None:
    """Write ``result`` to standard output in the configured format.

    Args:
        result: Report produced by the orchestrator.
        cfg: Output preferences (format, colour, emoji, source echo, quiet).
    """

    console = get_console_manager().get(color=cfg.color, emoji=cfg.emoji)
    if cfg.format == "json":
        console.out(json.dumps(result_payload(result), indent=2), highlight=False)
        return
    _render_issues(console, result.issues, show_source=cfg.show_source)
    if result.failures:
        _render_failures(result.failures, cfg)
    if not cfg.quiet:
        _render_summary(result, cfg)


def format_issue(issue: Issue) -> Text:
    """Return the indented line rendered for ``issue`` beneath its file header."""

    text = Text("  ")
    text.append(f"{issue.line:>5}", style="dim")
    text.append(f"  [{issue.tool}] ", style="cyan")
    text.append(issue.message)
    return text


def _render_issues(console: Console, issues: Iterable[Issue], *, show_source: bool) -> None:
    for file, grouped in groupby(issues, key=lambda issue: issue.file):
        console.print(Text(file, style="bold green"))
        for issue in grouped:
            console.print(format_issue(issue))
            if show_source and issue.source is not None:
                console.print(Text(f"         > {issue.source.rstrip()}", style="dim"))


def _render_failures(failures: tuple[ToolFailure, ...], cfg: OutputConfig) -> None:
    warn(f"{len(failures)} linter invocation(s) failed:", use_emoji=cfg.emoji, use_color=cfg.color)
    for failure in failures:
        warn(
            f"{failure.tool} ({failure.kind.value}) on {failure.file}: {failure.detail}",
            use_emoji=cfg.emoji,
            use_color=cfg.color,
        )


def _render_summary(result: RunResult, cfg: OutputConfig) -> None:
    files = len({issue.file for issue in result.issues})
    if result.issues:
        warn(
            f"{len(result.issues)} issue(s) on changed lines in {files} file(s)",
            use_emoji=cfg.emoji,
            use_color=cfg.color,
        )
    else:
        ok(
            f"No issues on changed lines ({len(result.files)} changed file(s), {result.invocations} linter run(s))",
            use_emoji=cfg.emoji,
            use_color=cfg.color,
        )


__all__ = ["format_issue", "render", "result_payload"]
