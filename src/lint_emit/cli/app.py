# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI entry point: lint the lines changed by a commit range."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer

from ..config import Config, ConfigError, ExecutionConfig, LinterConfig, OutputConfig
from ..config_loader import load_linters
from ..console import detect_tty, get_console_manager
from ..core.logging import configure_logging, fail
from ..diff.git import GitDiffEngine, GitError
from ..execution.runner import ToolRunner
from ..models import EXIT_FATAL, ChangedRange
from ..orchestration.orchestrator import Orchestrator
from ..reporting.formatters import render
from .options import (
    COLOR_OPTION,
    COMMIT_RANGE_ARGUMENT,
    CONFIG_OPTION,
    EMOJI_OPTION,
    FORMAT_OPTION,
    JOBS_OPTION,
    LINTERS_OPTION,
    LIST_LINTERS_OPTION,
    QUIET_OPTION,
    SHOW_SOURCE_OPTION,
    TIMEOUT_OPTION,
    VERBOSE_OPTION,
    OutputFormat,
    normalize_cli_values,
)
from .progress import InvocationProgress

LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Run linters over a git commit range and report only issues on changed lines.",
)


@dataclass(frozen=True, slots=True)
class PreparedRun:
    """Everything resolved before the first linter is started."""

    root: Path
    config: Config
    linters: tuple[LinterConfig, ...]
    ranges: dict[str, ChangedRange]


def prepare_run(
    *,
    commit_range: str | None,
    requested: tuple[str, ...],
    config_path: Path | None,
    execution: ExecutionConfig,
    output: OutputConfig,
    engine: GitDiffEngine,
    cwd: Path,
) -> PreparedRun:
    """Resolve the repository, configuration, linter selection and diff.

    Raises:
        ConfigError: If the configuration is invalid or names an unknown linter.
        GitError: If the repository or commit range cannot be diffed.
    """

    root = engine.repository_root(cwd)
    loaded = load_linters(config_path, root=root)
    LOGGER.info("loaded %d linter(s) from %s", len(loaded.linters), loaded.source)
    config = Config(linters=list(loaded.linters), execution=execution, output=output)
    selected = config.select_linters(requested)
    ranges = engine.changed_ranges(commit_range, root)
    return PreparedRun(root=root, config=config, linters=tuple(selected), ranges=ranges)


@app.command()
def lint(
    commit_range: COMMIT_RANGE_ARGUMENT = None,
    linters: LINTERS_OPTION = None,
    config_path: CONFIG_OPTION = None,
    jobs: JOBS_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    output_format: FORMAT_OPTION = OutputFormat.TEXT,
    show_source: SHOW_SOURCE_OPTION = False,
    color: COLOR_OPTION = True,
    emoji: EMOJI_OPTION = True,
    quiet: QUIET_OPTION = False,
    verbose: VERBOSE_OPTION = 0,
    list_linters: LIST_LINTERS_OPTION = False,
) -> None:
    """Lint the lines added by COMMIT_RANGE.

    Exit status: 0 when no issue is on a changed line, 1 when at least one
    is, 2 on configuration or git errors.
    """

    configure_logging(verbose)
    output = OutputConfig(
        format=output_format.value,
        color=color,
        emoji=emoji,
        show_source=show_source,
        quiet=quiet,
    )
    execution_overrides: dict[str, object] = {}
    if jobs is not None:
        execution_overrides["jobs"] = jobs
    if timeout is not None:
        execution_overrides["timeout"] = timeout
    execution = ExecutionConfig(**execution_overrides)

    engine = GitDiffEngine()
    try:
        if list_linters:
            root = engine.repository_root(Path.cwd())
            for linter in load_linters(config_path, root=root).linters:
                typer.echo(f"{linter.name}\t{linter.command}\t{','.join(sorted(linter.extensions))}")
            raise typer.Exit(code=0)
        prepared = prepare_run(
            commit_range=commit_range,
            requested=normalize_cli_values(linters),
            config_path=config_path,
            execution=execution,
            output=output,
            engine=engine,
            cwd=Path.cwd(),
        )
    except (ConfigError, GitError) as exc:
        fail(str(exc), use_emoji=emoji, use_color=color)
        raise typer.Exit(code=EXIT_FATAL) from exc

    orchestrator = Orchestrator(
        tool_runner=ToolRunner(root=prepared.root, timeout=execution.timeout),
        jobs=execution.jobs,
    )
    total = len(orchestrator.plan(prepared.linters, prepared.ranges))
    progress_console = get_console_manager().get(color=color, emoji=emoji, stderr=True)
    show_progress = detect_tty() and output.format == "text" and not quiet
    with InvocationProgress(total=total, console=progress_console, enabled=show_progress) as progress:
        orchestrator.after_invocation = progress.advance
        result = orchestrator.run(prepared.linters, prepared.ranges)

    render(result, output)
    raise typer.Exit(code=result.exit_code)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["PreparedRun", "app", "lint", "main", "prepare_run"]
