# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Keep only the issues that sit on lines changed by the commit range."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .filesystem.paths import normalize_path_key
from .models import ChangedRangeMap, Issue, RawIssue

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Correlator:
    """Intersect raw issues with the changed-range map.

    An issue survives only when its canonical path is a key of ``ranges`` and
    its line number is a member of that entry. There is no proximity
    matching, and a file absent from the map drops the issue.
    """

    ranges: ChangedRangeMap
    root: Path

    def canonical_path(self, reported: str) -> str:
        """Return the repository-relative POSIX key for a tool-reported path."""

        try:
            return normalize_path_key(reported, base_dir=self.root)
        except ValueError:
            return reported

    def correlate(self, tool: str, raw: RawIssue) -> Issue | None:
        """Return the in-scope :class:`Issue` for ``raw`` or ``None`` when it is dropped."""

        key = self.canonical_path(raw.file)
        changed = self.ranges.get(key)
        if changed is None:
            LOGGER.debug("%s: dropping %s:%d (file not in diff as %s)", tool, raw.file, raw.line, key)
            return None
        if raw.line not in changed:
            LOGGER.debug("%s: dropping %s:%d (line unchanged)", tool, key, raw.line)
            return None
        return Issue(tool=tool, file=key, line=raw.line, message=raw.message, source=changed.source_for(raw.line))

    def filter(self, tool: str, issues: Iterable[RawIssue]) -> Iterator[Issue]:
        """Yield the in-scope issues among ``issues``."""

        for raw in issues:
            issue = self.correlate(tool, raw)
            if issue is not None:
                yield issue


__all__ = ["Correlator"]
