"""Marker-file search between the working directory and the repository root.

Two strategies are supported:

- backwards: walk from ``cwd`` up through its parents, stopping at
  ``repo_root`` (inclusive) or at the filesystem root, whichever comes first.
- forwards: walk from ``repo_root`` down to ``cwd`` one component at a time.
  Only plain descendants are searched; a ``cwd`` outside ``repo_root`` never
  matches.

Both strategies only test that a regular file exists.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    BACKWARDS = "backwards"
    FORWARDS = "forwards"


DEFAULT_DIRECTION = Direction.FORWARDS


def _is_marker(candidate: Path) -> bool:
    if candidate.is_file():
        logger.debug("Found %s", candidate)
        return True
    return False


def back_search(cwd: Path, repo_root: Path, filename: str) -> bool:
    """Search from ``cwd`` backwards to ``repo_root``."""
    current = Path(cwd)
    root = Path(repo_root)
    while True:
        if _is_marker(current / filename):
            return True
        if current == root:
            return False
        parent = current.parent
        if parent == current:
            # Filesystem root reached without meeting repo_root.
            logger.debug("Stopped searching for %s at %s (outside %s)", filename, current, root)
            return False
        current = parent


def forward_search(cwd: Path, repo_root: Path, filename: str) -> bool:
    """Search from ``repo_root`` forwards to ``cwd``."""
    cwd = Path(cwd)
    root = Path(repo_root)
    try:
        relative = cwd.relative_to(root)
    except ValueError:
        logger.debug("%s is not below %s; skipping forward search for %s", cwd, root, filename)
        return False
    if any(part == ".." for part in relative.parts):
        return False

    current = root
    if _is_marker(current / filename):
        return True
    for part in relative.parts:
        current = current / part
        if _is_marker(current / filename):
            return True
    return False


def exists_between(cwd: Path, repo_root: Path, direction: Direction, filename: str) -> bool:
    """Return True if ``filename`` exists on the search path for ``direction``."""
    if direction is Direction.BACKWARDS:
        return back_search(cwd, repo_root, filename)
    return forward_search(cwd, repo_root, filename)


__all__ = [
    "Direction",
    "DEFAULT_DIRECTION",
    "back_search",
    "forward_search",
    "exists_between",
]
