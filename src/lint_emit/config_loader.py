# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate and load the TOML linter configuration."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Final

from .config import ConfigError, LinterConfig, parse_linters

PROJECT_CONFIG_NAME: Final[str] = ".lint-emit.toml"
USER_CONFIG_DIR: Final[str] = "lint-emit"
USER_CONFIG_NAME: Final[str] = "config.toml"
LINTERS_KEY: Final[str] = "linters"
BUNDLED_SOURCE: Final[str] = "bundled defaults"


@dataclass(frozen=True, slots=True)
class LoadedLinters:
    """Linter definitions together with the place they were read from."""

    linters: tuple[LinterConfig, ...]
    source: str


def user_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return ``$XDG_CONFIG_HOME/lint-emit/config.toml`` (``~/.config`` by default)."""

    environ = os.environ if env is None else env
    base = environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base).expanduser() / USER_CONFIG_DIR / USER_CONFIG_NAME


def candidate_paths(root: Path, env: Mapping[str, str] | None = None) -> list[Path]:
    """Return the configuration files consulted when ``--config`` is absent, in order."""

    return [root / PROJECT_CONFIG_NAME, user_config_path(env)]


def load_linters(
    explicit: Path | None,
    *,
    root: Path,
    env: Mapping[str, str] | None = None,
) -> LoadedLinters:
    """Load linter definitions following the documented lookup order.

    Args:
        explicit: Path passed with ``--config``; must exist when given.
        root: Repository root searched for a project configuration.
        env: Environment used to resolve the user configuration directory.

    Returns:
        LoadedLinters: Validated linters and a description of their origin.

    Raises:
        ConfigError: If the selected file is missing, unreadable or invalid.
    """

    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"Configuration file {explicit} does not exist")
        return _load_file(explicit)
    for candidate in candidate_paths(root, env):
        if candidate.is_file():
            return _load_file(candidate)
    return load_bundled_linters()


def load_bundled_linters() -> LoadedLinters:
    """Return the linters shipped with the package."""

    text = resources.files("lint_emit").joinpath("defaults/default_config.toml").read_text(encoding="utf-8")
    return _parse_document(text, source=BUNDLED_SOURCE)


def _load_file(path: Path) -> LoadedLinters:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration {path}: {exc}") from exc
    return _parse_document(text, source=str(path))


def _parse_document(text: str, *, source: str) -> LoadedLinters:
    try:
        data: dict[str, Any] = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{source}: invalid TOML: {exc}") from exc
    entries = data.get(LINTERS_KEY)
    if entries is None:
        raise ConfigError(f"{source}: no [[{LINTERS_KEY}]] entries defined")
    if not isinstance(entries, list):
        raise ConfigError(f"{source}: '{LINTERS_KEY}' must be an array of tables")
    return LoadedLinters(linters=tuple(parse_linters(entries, source=source)), source=source)


__all__ = [
    "BUNDLED_SOURCE",
    "LoadedLinters",
    "PROJECT_CONFIG_NAME",
    "candidate_paths",
    "load_bundled_linters",
    "load_linters",
    "user_config_path",
]
