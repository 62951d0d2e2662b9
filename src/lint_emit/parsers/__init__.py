# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool output parsers."""

from __future__ import annotations

from .pattern import MatchSummary, PatternMatcher

__all__ = ["MatchSummary", "PatternMatcher"]
