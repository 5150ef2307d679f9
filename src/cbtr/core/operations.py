"""Operations cbtr can dispatch and the program names that select them."""
from __future__ import annotations

from enum import Enum


class Operation(str, Enum):
    FORMAT = "format"
    CHECK = "check"
    BUILD = "build"
    TEST = "test"
    RUN = "run"

    @property
    def short_name(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        """Human-readable ``f/format`` style label."""
        return f"{self.short_name}/{self.value}"

    @classmethod
    def from_name(cls, name: str) -> "Operation":
        """Resolve an operation from its exact full or single-letter name.

        Raises:
            ValueError: If ``name`` is not a known operation name.
        """
        for op in cls:
            if name in (op.value, op.short_name):
                return op
        raise ValueError(f"unexpected operation name: {name!r}")


def operation_names() -> list[str]:
    """Return every accepted name (full and short), in declaration order."""
    names: list[str] = []
    for op in Operation:
        names.extend([op.short_name, op.value])
    return names


def describe_operations() -> str:
    return "[" + ", ".join(op.label for op in Operation) + "]"


__all__ = ["Operation", "operation_names", "describe_operations"]
