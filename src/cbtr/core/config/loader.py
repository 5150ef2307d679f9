"""
cbtr configuration loading (YAML only).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from cbtr.core.config.merge import merge_configs
from cbtr.core.config.models import LoadedConfig, ResolvedConfig
from cbtr.core.config.paths import repo_config_candidates, repo_config_path, user_config_path
from cbtr.core.config.validation import validate_config
from cbtr.core.exceptions import ConfigError
from cbtr.core.profiles import Profile

logger = logging.getLogger(__name__)


def read_config_document(path: Path) -> Dict[str, Any]:
    """Parse one YAML config file into a mapping.

    An empty file yields an empty mapping. Invalid YAML is never ignored.

    Raises:
        ConfigError: If the file cannot be read or parsed, or is not a mapping.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}", context={"path": str(path)}) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a YAML mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )
    return data


def load_config_file(path: Path) -> Optional[LoadedConfig]:
    """Load and validate one config source. Returns None if the file is absent."""
    path = Path(path)
    if not path.is_file():
        logger.debug("No config at %s", path)
        return None

    logger.debug("Config file: %s", path)
    data = read_config_document(path)
    validate_config(data, source=path)
    entries = data.get("entry") or []
    return LoadedConfig(
        path=path,
        settings=dict(data.get("settings") or {}),
        profiles=tuple(Profile.from_dict(entry) for entry in entries),
    )


class ConfigLoader:
    """Load and merge the repository and user configuration sources.

    Sources (checked first to last):
    1. Repository config: <repo root>/.cbtr.yaml (or .cbtr.yml)
    2. User config: <user config dir>/config.yaml, or an explicit --config-file
    """

    def __init__(self, config_file: Optional[Path] = None) -> None:
        self.config_file = Path(config_file) if config_file is not None else None

    @property
    def user_path(self) -> Path:
        return user_config_path(self.config_file)

    def load(self, repo_root: Path) -> ResolvedConfig:
        """Return the merged config for ``repo_root``.

        Raises:
            ConfigError: If a present source is malformed.
            NoConfigFoundError: If neither source exists.
        """
        if self.config_file is not None and not self.config_file.is_file():
            raise ConfigError(
                f"Unable to read config file: {self.config_file} does not exist",
                context={"path": str(self.config_file)},
            )

        repo = load_config_file(repo_config_path(repo_root))
        user = load_config_file(self.user_path)
        searched = [*repo_config_candidates(repo_root), self.user_path]
        return merge_configs(repo, user, searched=searched)

    __call__ = load


__all__ = ["read_config_document", "load_config_file", "ConfigLoader"]
