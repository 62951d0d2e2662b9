# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diff engine: changed line sets for a commit range."""

from __future__ import annotations

from .git import DEFAULT_RANGE, GitDiffEngine, GitError
from .hunks import iter_changed_ranges, parse_unified_diff

__all__ = ["DEFAULT_RANGE", "GitDiffEngine", "GitError", "iter_changed_ranges", "parse_unified_diff"]
