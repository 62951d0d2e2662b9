# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lint-emit package."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

EXIT_CLEAN: Final[int] = 0
EXIT_ISSUES: Final[int] = 1
EXIT_FATAL: Final[int] = 2


@dataclass(frozen=True, slots=True)
class ChangedRange:
    """Line numbers added by a commit range for a single file.

    ``sources`` maps each changed line number to the text introduced on that
    line so reports can echo the offending source.
    """

    path: str
    sources: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sources", MappingProxyType(dict(sorted(self.sources.items()))))

    @property
    def lines(self) -> tuple[int, ...]:
        """Return the changed line numbers in ascending order."""

        return tuple(self.sources)

    def __contains__(self, line: object) -> bool:
        return line in self.sources

    def __iter__(self) -> Iterator[int]:
        return iter(self.sources)

    def __len__(self) -> int:
        return len(self.sources)

    def source_for(self, line: int) -> str | None:
        """Return the added text for ``line`` when it is part of the range."""

        return self.sources.get(line)


ChangedRangeMap = Mapping[str, ChangedRange]


@dataclass(frozen=True, slots=True)
class RawIssue:
    """Issue extracted from tool output before it is checked against the diff."""

    file: str
    line: int
    message: str


class Issue(BaseModel):
    """Tool-reported issue confirmed to sit on a changed line."""

    model_config = ConfigDict(frozen=True)

    tool: str
    file: str
    line: int
    message: str
    source: str | None = None

    def sort_key(self) -> tuple[str, int, str, str]:
        """Return the deterministic ordering key (file, line, tool, message)."""

        return (self.file, self.line, self.tool, self.message)


class FailureKind(str, Enum):
    """Enumerate the ways a single tool invocation can fail."""

    NOT_FOUND = "not_found"
    PERMISSION = "permission"
    TIMEOUT = "timeout"
    EXIT_STATUS = "exit_status"


class ToolFailure(BaseModel):
    """Describe a tool invocation that produced no usable output."""

    model_config = ConfigDict(frozen=True)

    tool: str
    file: str
    kind: FailureKind
    detail: str

    def sort_key(self) -> tuple[str, str, str]:
        """Return the deterministic ordering key (tool, file, kind)."""

        return (self.tool, self.file, self.kind.value)


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Outcome of running one tool against one file.

    Exactly one of ``output`` or ``failure`` is populated. ``returncode`` is
    kept for successful runs because a non-zero exit without any parseable
    output is later reclassified as a failure.
    """

    tool: str
    file: str
    output: str | None = None
    returncode: int | None = None
    failure: ToolFailure | None = None

    @property
    def failed(self) -> bool:
        """Return ``True`` when the invocation could not produce output."""

        return self.failure is not None


class RunResult(BaseModel):
    """Aggregate report produced by the orchestrator."""

    model_config = ConfigDict(frozen=True)

    issues: tuple[Issue, ...] = Field(default_factory=tuple)
    failures: tuple[ToolFailure, ...] = Field(default_factory=tuple)
    files: tuple[str, ...] = Field(default_factory=tuple)
    invocations: int = 0

    @property
    def exit_code(self) -> int:
        """Return ``1`` when in-scope issues were found, ``0`` otherwise.

        Tool failures are reported separately and never change the status.
        """

        return EXIT_ISSUES if self.issues else EXIT_CLEAN


__all__ = [
    "EXIT_CLEAN",
    "EXIT_FATAL",
    "EXIT_ISSUES",
    "ChangedRange",
    "ChangedRangeMap",
    "FailureKind",
    "InvocationResult",
    "Issue",
    "RawIssue",
    "RunResult",
    "ToolFailure",
]
