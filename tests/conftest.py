# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from textwrap import dedent

import pytest

FLAG_LINTER_SOURCE = dedent(
    """
    import sys

    path = sys.argv[1]
    found = 0
    with open(path, encoding="utf-8") as handle:
        for number, text in enumerate(handle, start=1):
            if "BAD" in text:
                found += 1
                print(f"{path}:{number}: BAD marker found")
    sys.exit(1 if found else 0)
    """
)
FLAG_LINTER_REGEX = r"(?P<file>[^:\n]+):(?P<line>\d+): (?P<message>.*)"


@dataclass(slots=True)
class GitRepo:
    """Throwaway git working tree used by integration tests."""

    root: Path

    def git(self, *args: str) -> str:
        completed = subprocess.run(
            ["git", *args],
            cwd=self.root,
            check=True,
            capture_output=True,
            text=True,
        )
        return completed.stdout

    def write(self, relative: str, text: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def commit(self, message: str) -> str:
        self.git("add", "-A")
        self.git("commit", "-q", "-m", message)
        return self.git("rev-parse", "HEAD").strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepo:
    """Return an initialised repository with committer identity configured."""

    root = tmp_path / "repo"
    root.mkdir()
    repo = GitRepo(root=root)
    repo.git("init", "-q")
    repo.git("config", "user.email", "dev@example.com")
    repo.git("config", "user.name", "Dev")
    repo.git("config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def flag_linter(tmp_path: Path) -> Path:
    """Write a stand-in linter reporting every line containing ``BAD``."""

    script = tmp_path / "flag_linter.py"
    script.write_text(FLAG_LINTER_SOURCE, encoding="utf-8")
    return script


@pytest.fixture
def flag_linter_toml(flag_linter: Path) -> str:
    """Return a ``[[linters]]`` table running :func:`flag_linter` on ``.txt`` files."""

    return dedent(
        f"""
        [[linters]]
        name = "flag"
        cmd = '{sys.executable}'
        args = ['{flag_linter}', "{{file}}"]
        regex = '{FLAG_LINTER_REGEX}'
        ext = ["txt"]
        """
    )


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logger = logging.getLogger("lint_emit")
    handler = getattr(logger, "_lint_emit_handler", None)
    if handler is not None:
        logger.removeHandler(handler)
        delattr(logger, "_lint_emit_handler")
    logger.setLevel(logging.NOTSET)
