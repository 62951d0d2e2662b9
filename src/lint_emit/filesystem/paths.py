# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

import os
from functools import lru_cache
from os import PathLike
from pathlib import Path
from typing import Final

_Pathish = str | PathLike[str] | Path
_DEFAULT_CACHE_SIZE: Final[int] = 1024


@lru_cache(maxsize=_DEFAULT_CACHE_SIZE)
def _best_effort_resolve(path: Path) -> Path:
    """Return ``path`` resolved where possible without raising.

    Args:
        path: Candidate path to resolve.

    Returns:
        Path: Absolute variant when resolution succeeds; otherwise the closest
        achievable approximation.
    """

    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute() if not path.is_absolute() else path


def normalize_path(path: _Pathish, *, base_dir: _Pathish) -> Path:
    """Return ``path`` expressed relative to ``base_dir``.

    Relative inputs are interpreted against ``base_dir``. The lexical form is
    tried first so that symlinked files keep their in-repository name; the
    fully resolved form is used when only that one lies under ``base_dir``
    (for example a tool printing ``/private/tmp/...`` for ``/tmp/...``).

    Args:
        path: Filesystem path supplied by the caller or a tool.
        base_dir: Directory the result is made relative to.

    Returns:
        Path: Relative path when ``path`` lies under ``base_dir``, otherwise a
        ``..``-prefixed relative path or, failing that, the absolute path.

    Raises:
        ValueError: If ``path`` is empty.
    """

    text = str(path).strip()
    if not text:
        raise ValueError("path must not be empty")

    raw_path = Path(text).expanduser()
    base = Path(base_dir).expanduser()
    if not base.is_absolute():
        base = base.absolute()
    candidate = raw_path if raw_path.is_absolute() else base / raw_path

    lexical_base = Path(os.path.normpath(base))
    lexical = Path(os.path.normpath(candidate))
    for root, target in (
        (lexical_base, lexical),
        (_best_effort_resolve(lexical_base), _best_effort_resolve(lexical)),
    ):
        try:
            return target.relative_to(root)
        except ValueError:
            continue
    try:
        return Path(os.path.relpath(lexical, lexical_base))
    except ValueError:
        return lexical


def normalize_path_key(path: _Pathish, *, base_dir: _Pathish) -> str:
    """Return the POSIX-style key for ``path`` relative to ``base_dir``."""

    return normalize_path(path, base_dir=base_dir).as_posix()


__all__ = ("normalize_path", "normalize_path_key")
