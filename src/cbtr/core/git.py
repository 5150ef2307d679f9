"""Git repository root resolution."""
from __future__ import annotations

from pathlib import Path

from cbtr.core.exceptions import RepoRootError


def find_git_root(path: Path) -> Path:
    """Return the git repository root containing ``path``.

    Walks up parent directories looking for a ``.git`` entry (file or
    directory, so worktrees and submodules are handled). No git commands
    are run.

    Raises:
        RepoRootError: If no repository is found.
    """
    p = Path(path).resolve()
    if p.is_file():
        p = p.parent
    for candidate in [p, *p.parents]:
        if (candidate / ".git").exists():
            return candidate
    raise RepoRootError(f"{p} is not within a git repository", context={"path": str(p)})


__all__ = ["find_git_root"]
