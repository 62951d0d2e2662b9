# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration file discovery and loading."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from lint_emit.config import ConfigError
from lint_emit.config_loader import (
    BUNDLED_SOURCE,
    PROJECT_CONFIG_NAME,
    candidate_paths,
    load_bundled_linters,
    load_linters,
    user_config_path,
)


def _table(name: str) -> str:
    return dedent(
        f"""
        [[linters]]
        name = "{name}"
        cmd = "{name}"
        args = ["{{file}}"]
        regex = '(?P<file>[^:]+):(?P<line>\\d+): (?P<message>.*)'
        ext = ["py"]
        """
    )


def test_bundled_defaults_are_valid() -> None:
    loaded = load_bundled_linters()

    assert loaded.source == BUNDLED_SOURCE
    assert [linter.name for linter in loaded.linters] == ["clippy", "eslint", "phpmd", "phpcs"]
    eslint = next(linter for linter in loaded.linters if linter.name == "eslint")
    assert eslint.extensions == frozenset({"js", "jsx"})


def test_user_config_path_honours_xdg(tmp_path: Path) -> None:
    env = {"XDG_CONFIG_HOME": str(tmp_path / "xdg")}

    assert user_config_path(env) == tmp_path / "xdg" / "lint-emit" / "config.toml"
    assert candidate_paths(tmp_path / "repo", env) == [
        tmp_path / "repo" / PROJECT_CONFIG_NAME,
        tmp_path / "xdg" / "lint-emit" / "config.toml",
    ]


def test_lookup_order(tmp_path: Path) -> None:
    root = tmp_path / "repo"
    root.mkdir()
    env = {"XDG_CONFIG_HOME": str(tmp_path / "xdg")}

    assert load_linters(None, root=root, env=env).source == BUNDLED_SOURCE

    user_file = user_config_path(env)
    user_file.parent.mkdir(parents=True)
    user_file.write_text(_table("user"), encoding="utf-8")
    loaded = load_linters(None, root=root, env=env)
    assert [linter.name for linter in loaded.linters] == ["user"]
    assert loaded.source == str(user_file)

    (root / PROJECT_CONFIG_NAME).write_text(_table("project"), encoding="utf-8")
    assert [linter.name for linter in load_linters(None, root=root, env=env).linters] == ["project"]

    explicit = tmp_path / "explicit.toml"
    explicit.write_text(_table("explicit") + _table("second"), encoding="utf-8")
    loaded = load_linters(explicit, root=root, env=env)
    assert [linter.name for linter in loaded.linters] == ["explicit", "second"]


def test_missing_explicit_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_linters(tmp_path / "nope.toml", root=tmp_path, env={})


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("linters = [", "invalid TOML"),
        ("[tool]\nname = 'x'\n", "no \\[\\[linters\\]\\] entries"),
        ("linters = 'eslint'\n", "must be an array of tables"),
    ],
)
def test_malformed_documents(tmp_path: Path, text: str, expected: str) -> None:
    path = tmp_path / "bad.toml"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError, match=expected):
        load_linters(path, root=tmp_path, env={})
