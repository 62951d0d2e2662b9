# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestration of linter invocations."""

from __future__ import annotations

from .orchestrator import InvocationHook, Orchestrator
from .tool_selection import ScheduledInvocation, plan_invocations

__all__ = ["InvocationHook", "Orchestrator", "ScheduledInvocation", "plan_invocations"]
