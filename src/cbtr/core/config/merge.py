"""Merging of repository and user configuration.

Profiles: repository entries precede user entries, so repository rules shadow
user rules whenever both would match. Settings: repository values override
user values key by key.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from cbtr.core.config.models import LoadedConfig, ResolvedConfig, Settings
from cbtr.core.exceptions import NoConfigFoundError
from cbtr.core.profiles import ProfileList


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _no_config(searched: Sequence[Path]) -> NoConfigFoundError:
    paths = [str(p) for p in searched]
    listing = "".join(f"\n  - {p}" for p in paths)
    return NoConfigFoundError(
        f"No cbtr configuration found. Create one at:{listing}" if paths else "No cbtr configuration found",
        context={"searched": paths},
    )


def merge_profiles(
    repo_profiles: Optional[ProfileList],
    user_profiles: Optional[ProfileList],
    *,
    searched: Sequence[Path] = (),
) -> ProfileList:
    """Combine both profile lists, repository first.

    Raises:
        NoConfigFoundError: If neither source is present.
    """
    if repo_profiles is None and user_profiles is None:
        raise _no_config(searched)
    if user_profiles is None:
        return repo_profiles  # type: ignore[return-value]
    if repo_profiles is None:
        return user_profiles
    return tuple(repo_profiles) + tuple(user_profiles)


def merge_configs(
    repo: Optional[LoadedConfig],
    user: Optional[LoadedConfig],
    *,
    searched: Sequence[Path] = (),
) -> ResolvedConfig:
    """Merge two loaded sources into the config used for one invocation."""
    profiles = merge_profiles(
        repo.profiles if repo is not None else None,
        user.profiles if user is not None else None,
        searched=searched,
    )
    settings: Dict[str, Any] = {}
    for source in (user, repo):
        if source is not None:
            settings = deep_merge(settings, source.settings)
    sources = tuple(s.path for s in (repo, user) if s is not None)
    return ResolvedConfig(settings=Settings.from_dict(settings), profiles=profiles, sources=sources)


__all__ = ["deep_merge", "merge_profiles", "merge_configs"]
