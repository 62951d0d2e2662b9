# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Low-level runtime and logging helpers shared across lint-emit."""
