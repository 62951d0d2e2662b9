# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Result rendering."""

from __future__ import annotations

from .formatters import format_issue, render, result_payload

__all__ = ["format_issue", "render", "result_payload"]
