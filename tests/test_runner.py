# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for single linter invocations."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from lint_emit.config import LinterConfig
from lint_emit.core.runtime.process import CommandOptions
from lint_emit.execution.runner import ToolRunner, select_output
from lint_emit.models import FailureKind

REGEX = r"(?P<file>[^:\n]+):(?P<line>\d+): (?P<message>.*)"


def _python_linter(code: str, name: str = "py") -> LinterConfig:
    return LinterConfig(name=name, cmd=sys.executable, args=["-c", code, "{file}"], regex=REGEX, ext=["txt"])


def test_runs_in_root_with_absolute_target(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("x\n", encoding="utf-8")
    code = "import os, sys; print(os.getcwd()); print(sys.argv[1]); sys.exit(3)"

    result = ToolRunner(root=tmp_path).run(_python_linter(code), "a.txt")

    assert not result.failed
    assert result.returncode == 3
    cwd, target = result.output.splitlines()
    assert Path(cwd).resolve() == tmp_path.resolve()
    assert target == str(tmp_path / "a.txt")


def test_stderr_is_used_when_stdout_is_empty(tmp_path: Path) -> None:
    code = "import sys; sys.stderr.write('a.txt:1: from stderr\\n')"

    result = ToolRunner(root=tmp_path).run(_python_linter(code), "a.txt")

    assert result.output == "a.txt:1: from stderr\n"


def test_stdout_wins_over_stderr() -> None:
    completed = subprocess.CompletedProcess(["x"], 1, stdout="out\n", stderr="err\n")
    blank = subprocess.CompletedProcess(["x"], 1, stdout="  \n", stderr="err\n")

    assert select_output(completed) == "out\n"
    assert select_output(blank) == "err\n"


def test_missing_executable_is_a_not_found_failure(tmp_path: Path) -> None:
    linter = LinterConfig(name="ghost", cmd="lint-emit-no-such-tool", args=["{file}"], regex=REGEX, ext=["txt"])

    result = ToolRunner(root=tmp_path).run(linter, "a.txt")

    assert result.failed
    assert result.failure.kind is FailureKind.NOT_FOUND
    assert result.failure.tool == "ghost"
    assert result.failure.file == "a.txt"


def test_non_executable_file_is_a_permission_failure(tmp_path: Path) -> None:
    script = tmp_path / "not-executable.sh"
    script.write_text("#!/bin/sh\necho hi\n", encoding="utf-8")
    script.chmod(0o644)
    linter = LinterConfig(name="perm", cmd=str(script), args=["{file}"], regex=REGEX, ext=["txt"])

    result = ToolRunner(root=tmp_path).run(linter, "a.txt")

    assert result.failure is not None
    assert result.failure.kind is FailureKind.PERMISSION


def test_timeout_is_reported(tmp_path: Path) -> None:
    result = ToolRunner(root=tmp_path, timeout=0.2).run(_python_linter("import time; time.sleep(5)"), "a.txt")

    assert result.failure is not None
    assert result.failure.kind is FailureKind.TIMEOUT
    assert "timed out" in result.failure.detail


def test_injected_runner_receives_options(tmp_path: Path) -> None:
    seen: dict[str, object] = {}

    def fake(cmd: list[str], *, options: CommandOptions) -> subprocess.CompletedProcess[str]:
        seen["cmd"] = cmd
        seen["options"] = options
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    linter = LinterConfig(name="fake", cmd="fake", args=["--check", "{file}"], regex=REGEX, ext=["txt"])
    result = ToolRunner(root=tmp_path, timeout=9.0, runner=fake).run(linter, "dir/b.txt")

    assert result.output == ""
    assert result.returncode == 0
    assert seen["cmd"] == ["fake", "--check", str(tmp_path / "dir" / "b.txt")]
    options = seen["options"]
    assert isinstance(options, CommandOptions)
    assert options.cwd == tmp_path
    assert options.timeout == 9.0
    assert options.discard_stdin is True
