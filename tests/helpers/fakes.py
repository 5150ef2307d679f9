"""Fakes for the collaborators the dispatch core accepts by injection."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from cbtr.core.exceptions import RunError


class FakeWhich:
    """Executable lookup that only knows the given names."""

    def __init__(self, available: Iterable[str] = ()) -> None:
        self.available = set(available)
        self.calls: List[str] = []

    def __call__(self, name: str) -> Optional[str]:
        self.calls.append(name)
        if name in self.available:
            return f"/usr/bin/{name}"
        return None


class RecordingRunner:
    """Runner that records token lists and returns scripted exit codes.

    ``results`` maps the joined command string to an exit code or a
    ``RunError`` instance to raise; unknown commands exit 0.
    """

    def __init__(self, results: Dict[str, object] | None = None) -> None:
        self.results = dict(results or {})
        self.calls: List[List[str]] = []

    def run(self, tokens: Sequence[str]) -> int:
        self.calls.append(list(tokens))
        result = self.results.get(" ".join(tokens), 0)
        if isinstance(result, RunError):
            raise result
        return int(result)  # type: ignore[arg-type]

    @property
    def commands(self) -> List[str]:
        return [" ".join(c) for c in self.calls]
