from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from cbtr.core.profiles import ProfileList

DEFAULT_INDENT = "  | "


@dataclass(frozen=True)
class Settings:
    indent: str = DEFAULT_INDENT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Settings":
        data = data or {}
        indent = data.get("indent")
        return cls(indent=DEFAULT_INDENT if indent is None else str(indent))


@dataclass(frozen=True)
class LoadedConfig:
    """One parsed and validated configuration source."""

    path: Path
    settings: Dict[str, Any]
    profiles: ProfileList


@dataclass(frozen=True)
class ResolvedConfig:
    """Configuration after merging the repository and user sources."""

    settings: Settings
    profiles: ProfileList
    sources: Tuple[Path, ...] = field(default_factory=tuple)


__all__ = ["DEFAULT_INDENT", "Settings", "LoadedConfig", "ResolvedConfig"]
