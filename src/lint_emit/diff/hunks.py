# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse unified diff text into per-file changed line sets."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Final

from ..models import ChangedRange

HUNK_HEADER: Final[re.Pattern[str]] = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_len>\d+))? \+(?P<new_start>\d+)(?:,(?P<new_len>\d+))? @@"
)
DEV_NULL: Final[str] = "/dev/null"
_QUOTED_PATH: Final[re.Pattern[str]] = re.compile(r'^"(?P<body>(?:[^"\\]|\\.)*)"')
_ESCAPE: Final[re.Pattern[str]] = re.compile(r"\\([0-7]{3}|.)")
_C_ESCAPES: Final[dict[str, str]] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


@dataclass(slots=True)
class _FileSection:
    """Mutable accumulator for one ``diff --git`` section."""

    old_path: str | None = None
    new_path: str | None = None
    binary: bool = False
    deleted: bool = False
    has_new_header: bool = False
    added: dict[int, str] = field(default_factory=dict)

    def finish(self) -> ChangedRange | None:
        if self.binary or self.deleted or not self.new_path or not self.added:
            return None
        return ChangedRange(path=self.new_path, sources=self.added)


def unquote_path(raw: str) -> str:
    """Decode a path as git prints it (C-style quoting for unusual characters).

    Args:
        raw: Path token from a diff header, possibly wrapped in double quotes.

    Returns:
        str: The decoded path.
    """

    match = _QUOTED_PATH.match(raw)
    if not match:
        return raw
    body = match.group("body")
    buffer = bytearray()
    position = 0
    for escape in _ESCAPE.finditer(body):
        buffer += body[position : escape.start()].encode("utf-8")
        token = escape.group(1)
        if len(token) == 3:
            buffer.append(int(token, 8))
        else:
            buffer += _C_ESCAPES.get(token, token).encode("utf-8")
        position = escape.end()
    buffer += body[position:].encode("utf-8")
    return buffer.decode("utf-8", errors="replace")


def _strip_prefix(path: str) -> str | None:
    """Return ``path`` without git's ``a/``/``b/`` prefix, or ``None`` for ``/dev/null``."""

    path = unquote_path(path.rstrip("\t").split("\t", 1)[0])
    if path == DEV_NULL:
        return None
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


def iter_changed_ranges(lines: Iterable[str]) -> Iterator[ChangedRange]:
    """Yield a :class:`ChangedRange` for every file in a unified diff with added lines.

    Hunk bodies are walked with a running new-file line counter starting at the
    header's ``+start``: context lines advance it, removed lines do not, added
    lines advance it and are recorded.

    Args:
        lines: Diff text split into lines (trailing newlines optional).

    Yields:
        ChangedRange: One entry per text file that gained at least one line.
    """

    section: _FileSection | None = None
    new_line = 0
    remaining_new = 0
    remaining_old = 0

    for raw in lines:
        line = raw.removesuffix("\n").removesuffix("\r")
        if remaining_new > 0 or remaining_old > 0:
            marker = line[:1]
            if marker == "+":
                section.added[new_line] = line[1:]
                new_line += 1
                remaining_new -= 1
                continue
            if marker == "-":
                remaining_old -= 1
                continue
            if marker == " " or line == "":
                new_line += 1
                remaining_new -= 1
                remaining_old -= 1
                continue
            if marker == "\\":
                continue
            # malformed hunk; fall through and treat the line as a header
            remaining_new = remaining_old = 0

        if line.startswith("diff --git "):
            if section is not None and (finished := section.finish()) is not None:
                yield finished
            section = _FileSection()
            continue
        if line.startswith("--- ") and (section is None or section.has_new_header):
            # plain `diff -u` output has no `diff --git` line between files
            if section is not None and (finished := section.finish()) is not None:
                yield finished
            section = _FileSection()
        if section is None:
            continue
        if line.startswith("\\"):
            continue
        header = HUNK_HEADER.match(line)
        if header:
            new_line = int(header.group("new_start"))
            remaining_new = int(header.group("new_len") or 1)
            remaining_old = int(header.group("old_len") or 1)
            continue
        if line.startswith("--- "):
            section.old_path = _strip_prefix(line[4:])
        elif line.startswith("+++ "):
            section.new_path = _strip_prefix(line[4:])
            section.has_new_header = True
            if section.new_path is None:
                section.deleted = True
        elif line.startswith("rename to "):
            section.new_path = unquote_path(line[len("rename to ") :])
        elif line.startswith("rename from "):
            section.old_path = unquote_path(line[len("rename from ") :])
        elif line.startswith("deleted file mode"):
            section.deleted = True
        elif line.startswith("Binary files ") or line.startswith("GIT binary patch"):
            section.binary = True

    if section is not None and (finished := section.finish()) is not None:
        yield finished


def parse_unified_diff(text: str) -> dict[str, ChangedRange]:
    """Return the changed-range map for a unified diff, keyed by new-file path.

    Only ``\\n`` separates diff lines; form feeds, bare carriage returns and
    Unicode line separators are content of the line they appear on.
    """

    lines = text.removesuffix("\n").split("\n") if text else []
    return {changed.path: changed for changed in iter_changed_ranges(lines)}


__all__ = ["HUNK_HEADER", "iter_changed_ranges", "parse_unified_diff", "unquote_path"]
