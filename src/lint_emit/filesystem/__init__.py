# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem helpers."""

from __future__ import annotations

from .paths import normalize_path, normalize_path_key

__all__ = ["normalize_path", "normalize_path_key"]
