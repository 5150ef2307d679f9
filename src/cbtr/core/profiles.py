"""Profile (``entry``) data model.

A profile bundles preconditions (binaries on ``PATH``, marker files near the
working directory) with the commands it registers per operation. Profiles are
immutable once built from configuration.
"""
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Tuple

from cbtr.core.operations import Operation
from cbtr.core.search import DEFAULT_DIRECTION, Direction, exists_between

logger = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]


def as_tuple(value: Any) -> Tuple[str, ...]:
    """Normalize a ``str | list[str] | None`` config value into a tuple."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class FileRequirement:
    names: Tuple[str, ...]
    direction: Direction = DEFAULT_DIRECTION

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FileRequirement":
        raw_direction = data.get("search-direction")
        direction = Direction(raw_direction) if raw_direction else DEFAULT_DIRECTION
        return cls(names=as_tuple(data.get("name")), direction=direction)


@dataclass(frozen=True)
class ToolSets:
    format: Optional[Tuple[str, ...]] = None
    check: Optional[Tuple[str, ...]] = None
    build: Optional[Tuple[str, ...]] = None
    test: Optional[Tuple[str, ...]] = None
    run: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ToolSets":
        data = data or {}
        kwargs = {}
        for op in Operation:
            value = data.get(op.value)
            kwargs[op.value] = None if value is None else as_tuple(value)
        return cls(**kwargs)

    def for_operation(self, operation: Operation) -> Optional[Tuple[str, ...]]:
        if operation is Operation.FORMAT:
            return self.format
        if operation is Operation.CHECK:
            return self.check
        if operation is Operation.BUILD:
            return self.build
        if operation is Operation.TEST:
            return self.test
        return self.run


@dataclass(frozen=True)
class Profile:
    name: str
    required_binaries: Tuple[str, ...] = ()
    file_requirement: Optional[FileRequirement] = None
    tool_sets: ToolSets = field(default_factory=ToolSets)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Profile":
        """Build a profile from one validated ``entry`` mapping."""
        file_data = data.get("file")
        return cls(
            name=str(data["name"]),
            required_binaries=as_tuple(data.get("bin")),
            file_requirement=FileRequirement.from_dict(file_data) if file_data else None,
            tool_sets=ToolSets.from_dict(data.get("tools")),
        )

    def matches(self, cwd: Path, repo_root: Path, *, which: Which = shutil.which) -> bool:
        """Return True if every binary resolves and every marker file is found."""
        for binary in self.required_binaries:
            if which(binary) is None:
                logger.debug("Couldn't find %s on $PATH", binary)
                return False

        if self.file_requirement is not None:
            direction = self.file_requirement.direction
            for name in self.file_requirement.names:
                if not exists_between(cwd, repo_root, direction, name):
                    logger.debug("Couldn't find %s searching %s", name, direction.value)
                    return False

        return True

    def tools_for(self, operation: Operation) -> Optional[Tuple[str, ...]]:
        return self.tool_sets.for_operation(operation)


ProfileList = Tuple[Profile, ...]


__all__ = [
    "Which",
    "as_tuple",
    "FileRequirement",
    "ToolSets",
    "Profile",
    "ProfileList",
]
