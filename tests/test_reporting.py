# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for text and JSON rendering."""

from __future__ import annotations

import json

import pytest

from lint_emit.config import OutputConfig
from lint_emit.models import FailureKind, Issue, RunResult, ToolFailure
from lint_emit.reporting import format_issue, render, result_payload


def _result() -> RunResult:
    return RunResult(
        issues=(
            Issue(tool="eslint", file="src/app.js", line=12, message="Missing semicolon", source="let x = 1"),
            Issue(tool="eslint", file="src/app.js", line=14, message="Unexpected var"),
            Issue(tool="phpcs", file="web/index.php", line=3, message="Line too long"),
        ),
        failures=(ToolFailure(tool="phpmd", file="web/index.php", kind=FailureKind.NOT_FOUND, detail="phpmd missing"),),
        files=("src/app.js", "web/index.php"),
        invocations=4,
    )


def test_format_issue_layout() -> None:
    text = format_issue(Issue(tool="eslint", file="a.js", line=7, message="Bad"))

    assert text.plain == "      7  [eslint] Bad"


def test_text_report_groups_by_file(capsys: pytest.CaptureFixture[str]) -> None:
    render(_result(), OutputConfig(color=False, emoji=False, show_source=True))

    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[0] == "src/app.js"
    assert "[eslint] Missing semicolon" in lines[1]
    assert lines[2].strip() == "> let x = 1"
    assert "[eslint] Unexpected var" in lines[3]
    assert lines[4] == "web/index.php"
    assert "phpmd (not_found) on web/index.php: phpmd missing" in captured.err
    assert "3 issue(s) on changed lines in 2 file(s)" in captured.err


def test_quiet_text_report_has_no_summary(capsys: pytest.CaptureFixture[str]) -> None:
    render(RunResult(files=("a.py",), invocations=1), OutputConfig(color=False, emoji=False, quiet=True))

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_clean_summary(capsys: pytest.CaptureFixture[str]) -> None:
    render(RunResult(files=("a.py",), invocations=2), OutputConfig(color=False, emoji=False))

    assert "No issues on changed lines (1 changed file(s), 2 linter run(s))" in capsys.readouterr().err


def test_json_report_is_written_to_stdout_only(capsys: pytest.CaptureFixture[str]) -> None:
    render(_result(), OutputConfig(format="json", color=False, emoji=False))

    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert captured.err == ""
    assert payload == result_payload(_result())
    assert payload["exit_code"] == 1
    assert payload["issues"][0] == {
        "tool": "eslint",
        "file": "src/app.js",
        "line": 12,
        "message": "Missing semicolon",
        "source": "let x = 1",
    }
    assert payload["failures"][0]["kind"] == "not_found"
