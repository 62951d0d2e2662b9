# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for regex-driven issue extraction."""

from __future__ import annotations

import logging

import pytest

from lint_emit.models import RawIssue
from lint_emit.parsers.pattern import PatternMatcher

ESLINT_REGEX = r"(?P<file>.*): line (?P<line>\d*), col \d*, (?P<message>.*)"


def test_compact_eslint_output() -> None:
    matcher = PatternMatcher(ESLINT_REGEX, tool="eslint")
    output = "src/app.js: line 12, col 4, Missing semicolon\n\n1 problem\n"

    assert list(matcher.extract(output).issues) == [
        RawIssue(file="src/app.js", line=12, message="Missing semicolon"),
    ]


def test_pattern_may_span_lines() -> None:
    pattern = r"(?m)^(?P<message>warning: .+)\n\s+--> (?P<file>[^:\n]+):(?P<line>\d+):\d+$"
    output = (
        "warning: unused variable: `x`\n"
        "   --> src/main.rs:4:9\n"
        "warning: function is never used\n"
        "   --> src/lib.rs:10:4\n"
    )

    issues = list(PatternMatcher(pattern).extract(output).issues)

    assert issues == [
        RawIssue(file="src/main.rs", line=4, message="warning: unused variable: `x`"),
        RawIssue(file="src/lib.rs", line=10, message="warning: function is never used"),
    ]


def test_missing_file_group_falls_back_to_invoked_file() -> None:
    pattern = r"(?m)^(?:(?P<file>\S+\.php):)?(?P<line>\d+)\t(?P<message>.+)$"

    issues = PatternMatcher(pattern).extract("7\tAvoid unused locals\n", default_file="lib/a.php").issues

    assert issues == [RawIssue(file="lib/a.php", line=7, message="Avoid unused locals")]


def test_unusable_line_numbers_are_discarded_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="lint_emit.parsers.pattern")
    matcher = PatternMatcher(ESLINT_REGEX, tool="eslint")
    output = "a.js: line , col 1, no line\nb.js: line 0, col 1, zero\nc.js: line 3, col 1, fine\n"

    summary = matcher.extract(output)

    assert summary.issues == (RawIssue(file="c.js", line=3, message="fine"),)
    assert summary.discarded == 2
    assert summary.matched == 3
    assert sum("discarding match" in record.getMessage() for record in caplog.records) == 2


def test_no_matches_returns_empty_summary() -> None:
    summary = PatternMatcher(ESLINT_REGEX).extract("All good!\n")

    assert summary.issues == ()
    assert summary.matched == 0


def test_invalid_pattern_is_rejected() -> None:
    with pytest.raises(ValueError, match="missing named group"):
        PatternMatcher(r"(?P<line>\d+)")
