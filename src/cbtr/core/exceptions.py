from __future__ import annotations

from typing import Any, Dict, Mapping

EXIT_CONFIG_ERROR = 1
EXIT_USAGE_ERROR = 2
RUNNER_FAILURE_EXIT_CODE = 1


class CbtrError(Exception):
    """Base exception for cbtr."""

    context: Dict[str, Any]
    exit_code: int = EXIT_CONFIG_ERROR

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}


class ConfigError(CbtrError, ValueError):
    """Raised when a configuration source exists but cannot be used."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CbtrError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class NoConfigFoundError(CbtrError, FileNotFoundError):
    """Raised when neither the repository nor the user config exists."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CbtrError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class NoMatchingProfileError(CbtrError):
    """Raised when no profile matches the working directory."""


class NoToolsForOperationError(CbtrError):
    """Raised when the matched profile declares no commands for the operation."""

    def __init__(
        self,
        message: str,
        *,
        profile: str | None = None,
        operation: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if profile:
            ctx["profile"] = profile
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class RepoRootError(CbtrError):
    """Raised when the repository root cannot be located."""


class RunError(CbtrError, RuntimeError):
    """Raised when a command could not be run to a numeric exit code."""

    exit_code = RUNNER_FAILURE_EXIT_CODE

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CbtrError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class CommandNotFoundError(RunError):
    """Command binary not found on PATH."""


class SpawnError(RunError):
    """The operating system refused to start the command."""


class NoExitCodeError(RunError):
    """The command terminated without a numeric exit code (e.g. killed by a signal)."""


class OutputError(RunError):
    """Child output could not be written to its sink (e.g. a closed pipe)."""


__all__ = [
    "EXIT_CONFIG_ERROR",
    "EXIT_USAGE_ERROR",
    "RUNNER_FAILURE_EXIT_CODE",
    "CbtrError",
    "ConfigError",
    "NoConfigFoundError",
    "NoMatchingProfileError",
    "NoToolsForOperationError",
    "RepoRootError",
    "RunError",
    "CommandNotFoundError",
    "SpawnError",
    "NoExitCodeError",
    "OutputError",
]
