# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter subprocess execution."""

from __future__ import annotations

from .runner import CommandRunner, ToolRunner, select_output

__all__ = ["CommandRunner", "ToolRunner", "select_output"]
