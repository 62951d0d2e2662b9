# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and validation for lint-emit."""

from __future__ import annotations

import math
import os
import re
from collections.abc import Sequence
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

FILE_PLACEHOLDER: Final[str] = "{file}"
REQUIRED_GROUPS: Final[frozenset[str]] = frozenset({"file", "line", "message"})
DEFAULT_TIMEOUT_SECONDS: Final[float] = 120.0


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


def default_parallel_jobs() -> int:
    """Return 75% of available CPU cores (minimum of 1)."""
    cores = os.cpu_count() or 1
    return max(1, math.floor(cores * 0.75))


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` and check it exposes exactly the required named groups.

    Args:
        pattern: Regular expression taken from a linter configuration.

    Returns:
        re.Pattern[str]: Compiled expression.

    Raises:
        ValueError: If the expression does not compile, or its named groups are
            not exactly ``file``, ``line`` and ``message``.
    """

    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"invalid regex {pattern!r}: {exc}") from exc
    groups = set(compiled.groupindex)
    missing = sorted(REQUIRED_GROUPS - groups)
    if missing:
        raise ValueError(f"regex is missing named group(s): {', '.join(missing)}")
    extra = sorted(groups - REQUIRED_GROUPS)
    if extra:
        raise ValueError(f"regex has unsupported named group(s): {', '.join(extra)}")
    return compiled


class LinterConfig(BaseModel):
    """One external analysis tool and how to read its output.

    Field aliases match the keys of the TOML configuration file
    (``cmd``, ``args``, ``regex``, ``ext``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(min_length=1)
    command: str = Field(alias="cmd", min_length=1)
    arguments: tuple[str, ...] = Field(default_factory=tuple, alias="args")
    pattern: str = Field(alias="regex")
    extensions: frozenset[str] = Field(alias="ext")

    @field_validator("name", "command")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("pattern")
    @classmethod
    def _validate_pattern(cls, value: str) -> str:
        compile_pattern(value)
        return value

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalise_extensions(cls, value: object) -> frozenset[str]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (Sequence, set, frozenset)):
            raise ValueError("ext must be a list of file extensions")
        normalised = frozenset(str(item).strip().lstrip(".").lower() for item in value)
        normalised = normalised - {""}
        if not normalised:
            raise ValueError("ext must list at least one file extension")
        return normalised

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        """Return the compiled output pattern (cached by :mod:`re`)."""

        return re.compile(self.pattern)

    def applies_to(self, path: str) -> bool:
        """Return whether the file at ``path`` has one of this tool's extensions."""

        _, dot, suffix = path.rpartition("/")[-1].rpartition(".")
        return bool(dot) and suffix.lower() in self.extensions

    def build_command(self, target: str) -> list[str]:
        """Return the argv for running the tool on ``target``.

        Every occurrence of ``{file}`` in every argument is replaced.
        """

        return [self.command, *(arg.replace(FILE_PLACEHOLDER, target) for arg in self.arguments)]


class ExecutionConfig(BaseModel):
    """Worker pool and per-invocation limits."""

    model_config = ConfigDict(validate_assignment=True)

    jobs: int = Field(default_factory=default_parallel_jobs, ge=1)
    timeout: float | None = Field(default=DEFAULT_TIMEOUT_SECONDS)

    @field_validator("timeout")
    @classmethod
    def _disable_zero_timeout(cls, value: float | None) -> float | None:
        if value is None or value <= 0:
            return None
        return value


class OutputConfig(BaseModel):
    """Configuration for controlling how results are rendered."""

    model_config = ConfigDict(validate_assignment=True)

    format: Literal["text", "json"] = "text"
    color: bool = True
    emoji: bool = True
    show_source: bool = False
    quiet: bool = False


class Config(BaseModel):
    """Complete runtime configuration."""

    model_config = ConfigDict(validate_assignment=True)

    linters: list[LinterConfig] = Field(default_factory=list)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @model_validator(mode="after")
    def _reject_duplicate_names(self) -> Config:
        seen: set[str] = set()
        for linter in self.linters:
            if linter.name in seen:
                raise ValueError(f"duplicate linter name {linter.name!r}")
            seen.add(linter.name)
        return self

    def linter_names(self) -> list[str]:
        """Return configured linter names in declaration order."""

        return [linter.name for linter in self.linters]

    def select_linters(self, names: Sequence[str] | None) -> list[LinterConfig]:
        """Return the linters restricted to ``names``.

        Args:
            names: Requested linter names; ``None`` or empty selects all.

        Returns:
            list[LinterConfig]: Matching linters in declaration order.

        Raises:
            ConfigError: If a requested name is not configured.
        """

        if not names:
            return list(self.linters)
        known = set(self.linter_names())
        unknown = [name for name in dict.fromkeys(names) if name not in known]
        if unknown:
            available = ", ".join(self.linter_names()) or "<none>"
            raise ConfigError(f"Unknown linter(s): {', '.join(unknown)} (configured: {available})")
        wanted = set(names)
        return [linter for linter in self.linters if linter.name in wanted]


def parse_linters(entries: Sequence[object], *, source: str) -> list[LinterConfig]:
    """Validate raw linter tables into :class:`LinterConfig` instances.

    Args:
        entries: Raw ``[[linters]]`` tables.
        source: Human-readable origin used in error messages.

    Returns:
        list[LinterConfig]: Validated linter definitions.

    Raises:
        ConfigError: If any entry is malformed or names collide.
    """

    linters: list[LinterConfig] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"{source}: linters[{index}] must be a table")
        label = entry.get("name", f"#{index}")
        try:
            linters.append(LinterConfig.model_validate(entry))
        except ValidationError as exc:
            raise ConfigError(f"{source}: linter {label!r} is invalid: {_summarise(exc)}") from exc
    try:
        Config(linters=linters)
    except ValidationError as exc:
        raise ConfigError(f"{source}: {_summarise(exc)}") from exc
    return linters


def _summarise(exc: ValidationError) -> str:
    """Return a compact one-line rendering of ``exc``."""

    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


__all__ = [
    "Config",
    "ConfigError",
    "ExecutionConfig",
    "FILE_PLACEHOLDER",
    "LinterConfig",
    "OutputConfig",
    "REQUIRED_GROUPS",
    "compile_pattern",
    "default_parallel_jobs",
    "parse_linters",
]
