# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer parameter declarations shared by the lint-emit command."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer


class OutputFormat(str, Enum):
    """Supported report formats."""

    TEXT = "text"
    JSON = "json"


COMMIT_RANGE_ARGUMENT = Annotated[
    str | None,
    typer.Argument(
        help="Commit range (A..B), a single ref to compare the working tree with, or nothing for HEAD.",
        show_default=False,
    ),
]
LINTERS_OPTION = Annotated[
    list[str] | None,
    typer.Option(
        "--linters",
        "-l",
        help="Only run the named linters (repeatable, or comma separated).",
        show_default=False,
    ),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Linter configuration file (TOML).",
        dir_okay=False,
        show_default=False,
    ),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Parallel linter invocations (default: 75% of CPU cores).", show_default=False),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", min=0.0, help="Seconds before a single linter run is abandoned (0 disables).", show_default=False),
]
FORMAT_OPTION = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", case_sensitive=False, help="Report format."),
]
SHOW_SOURCE_OPTION = Annotated[
    bool,
    typer.Option("--show-source", help="Print the changed source line under each issue."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Toggle ANSI colour output."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
QUIET_OPTION = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Suppress the summary line and progress bar."),
]
VERBOSE_OPTION = Annotated[
    int,
    typer.Option("--verbose", "-v", count=True, help="Increase log verbosity (-v warnings, -vv info, -vvv debug)."),
]
LIST_LINTERS_OPTION = Annotated[
    bool,
    typer.Option("--list-linters", help="List configured linters and exit."),
]


def normalize_cli_values(values: Sequence[str] | None) -> tuple[str, ...]:
    """Return sanitized CLI values preserving order, splitting comma-separated entries."""

    if not values:
        return ()
    cleaned_values: list[str] = []
    for entry in values:
        for part in entry.split(","):
            stripped = part.strip()
            if stripped:
                cleaned_values.append(stripped)
    return tuple(cleaned_values)


__all__ = [
    "COLOR_OPTION",
    "COMMIT_RANGE_ARGUMENT",
    "CONFIG_OPTION",
    "EMOJI_OPTION",
    "FORMAT_OPTION",
    "JOBS_OPTION",
    "LINTERS_OPTION",
    "LIST_LINTERS_OPTION",
    "OutputFormat",
    "QUIET_OPTION",
    "SHOW_SOURCE_OPTION",
    "TIMEOUT_OPTION",
    "VERBOSE_OPTION",
    "normalize_cli_values",
]
