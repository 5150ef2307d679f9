"""Configuration file locations.

User config directory precedence (highest to lowest):
1. Environment variable: CBTR_CONFIG_DIR
2. $XDG_CONFIG_HOME/cbtr
3. ~/.config/cbtr

The repository config lives at a fixed filename in the repository root.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

APP_NAME = "cbtr"
CONFIG_DIR_ENV = "CBTR_CONFIG_DIR"
USER_CONFIG_FILENAME = "config.yaml"
REPO_CONFIG_FILENAMES = (".cbtr.yaml", ".cbtr.yml")


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name)
    if isinstance(value, str) and value.strip():
        return Path(value.strip()).expanduser()
    return None


def get_user_config_dir() -> Path:
    """Return the user config directory (not created)."""
    override = _env_path(CONFIG_DIR_ENV)
    if override is not None:
        return override
    xdg = _env_path("XDG_CONFIG_HOME")
    if xdg is not None and xdg.is_absolute():
        return xdg / APP_NAME
    return Path.home() / ".config" / APP_NAME


def user_config_path(override: Optional[Path] = None) -> Path:
    """Return the user config file, honouring an explicit ``--config-file``."""
    if override is not None:
        return Path(override).expanduser()
    return get_user_config_dir() / USER_CONFIG_FILENAME


def repo_config_candidates(repo_root: Path) -> List[Path]:
    return [Path(repo_root) / name for name in REPO_CONFIG_FILENAMES]


def repo_config_path(repo_root: Path) -> Path:
    """Return the first existing repository config, else the primary filename."""
    candidates = repo_config_candidates(repo_root)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return candidates[0]


__all__ = [
    "APP_NAME",
    "CONFIG_DIR_ENV",
    "USER_CONFIG_FILENAME",
    "REPO_CONFIG_FILENAMES",
    "get_user_config_dir",
    "user_config_path",
    "repo_config_candidates",
    "repo_config_path",
]
