# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process execution helpers."""

from __future__ import annotations

from .process import CommandOptions, CommandTimeoutError, run_command

__all__ = ["CommandOptions", "CommandTimeoutError", "run_command"]
