# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Extract issues from free-form tool output with a named-group regex."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from ..config import LinterConfig, compile_pattern
from ..models import RawIssue

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchSummary:
    """Issues extracted from one output buffer plus the number of discarded matches."""

    issues: tuple[RawIssue, ...]
    discarded: int

    @property
    def matched(self) -> int:
        """Return the number of pattern matches, usable or not."""

        return len(self.issues) + self.discarded


def _parse_line_number(value: str | None) -> int | None:
    """Return ``value`` as a positive integer or ``None``."""

    if value is None:
        return None
    stripped = value.strip()
    if not stripped.isdigit():
        return None
    number = int(stripped)
    return number if number > 0 else None


class PatternMatcher:
    """Apply a linter's pattern to the whole captured output of one invocation.

    The expression runs over the complete buffer rather than line by line so a
    single match may span several physical lines, as needed for tools that
    print the location and the message on different lines.
    """

    def __init__(self, pattern: str | re.Pattern[str], *, tool: str = "") -> None:
        self._pattern = compile_pattern(pattern) if isinstance(pattern, str) else pattern
        self._tool = tool

    @classmethod
    def for_linter(cls, linter: LinterConfig) -> PatternMatcher:
        """Build a matcher from a validated :class:`LinterConfig`."""

        return cls(linter.compiled_pattern, tool=linter.name)

    def extract(self, output: str, *, default_file: str | None = None) -> MatchSummary:
        """Return all usable issues in ``output`` and count the discarded matches.

        Matches whose ``line`` group is missing, empty, non-numeric or zero are
        dropped and logged at warning level; they never abort extraction.
        """

        issues: list[RawIssue] = []
        discarded = 0
        for match in self._pattern.finditer(output):
            if match.end() == match.start():
                continue
            line_text = match.group("line")
            line = _parse_line_number(line_text)
            file_text = match.group("file")
            file = file_text.strip() if file_text and file_text.strip() else default_file
            if line is None or not file:
                discarded += 1
                LOGGER.warning(
                    "%s: discarding match %r (line=%r, file=%r)",
                    self._tool or "pattern",
                    match.group(0)[:200],
                    line_text,
                    file_text,
                )
                continue
            message = (match.group("message") or "").strip()
            issues.append(RawIssue(file=file, line=line, message=message))
        return MatchSummary(issues=tuple(issues), discarded=discarded)


__all__ = ["MatchSummary", "PatternMatcher"]
