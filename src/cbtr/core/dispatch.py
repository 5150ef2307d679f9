"""Dispatch loop: resolve config, match a profile, run its commands.

States::

    IDLE -> RESOLVING -> MATCHING -> NO_MATCH
                                  -> HAS_PROFILE -> NO_TOOLS_FOR_OPERATION
                                                 -> EXECUTING -> COMMAND_FAILED
                                                              -> SUCCEEDED

NO_MATCH and NO_TOOLS_FOR_OPERATION raise; COMMAND_FAILED returns the failing
child's exit code (or the runner failure sentinel).
"""
from __future__ import annotations

import logging
import shutil
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence, TextIO, Tuple

from cbtr.core.config.models import ResolvedConfig, Settings
from cbtr.core.exceptions import (
    ConfigError,
    NoMatchingProfileError,
    NoToolsForOperationError,
    RepoRootError,
    RunError,
)
from cbtr.core.git import find_git_root
from cbtr.core.matcher import find_match
from cbtr.core.operations import Operation
from cbtr.core.process.runner import CommandRunner, split_command
from cbtr.core.profiles import Which

logger = logging.getLogger(__name__)


class Runner(Protocol):
    def run(self, tokens: Sequence[str]) -> int: ...


class DispatchState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    MATCHING = "matching"
    NO_MATCH = "no_match"
    HAS_PROFILE = "has_profile"
    NO_TOOLS_FOR_OPERATION = "no_tools_for_operation"
    EXECUTING = "executing"
    COMMAND_FAILED = "command_failed"
    SUCCEEDED = "succeeded"


def _say(out: TextIO, message: str) -> None:
    # Flush before spawning so our line is not reordered after child output.
    out.write(f"{message}\n")
    out.flush()


def run_commands(
    commands: Sequence[str],
    runner: Runner,
    *,
    dry_run: bool = False,
    out: Optional[TextIO] = None,
) -> int:
    """Run ``commands`` in order, stopping at the first failure.

    Returns:
        0 if every command succeeded (or ``dry_run``), the first non-zero exit
        code otherwise, or the runner failure sentinel for a ``RunError``.

    Raises:
        ConfigError: If a command string is blank.
    """
    out = out if out is not None else sys.stdout
    for command in commands:
        tokens = split_command(command)
        if not tokens:
            raise ConfigError("Empty command string in tool list", context={"command": command})

        _say(out, f"Running '{command}'")
        if dry_run:
            _say(out, f"[dryrun] Would run '{command}'")
            continue

        try:
            code = runner.run(tokens)
        except RunError as exc:
            logger.error("%s", exc)
            return exc.exit_code

        _say(out, f"command exited with return code {code}")
        if code != 0:
            logger.error("Subprocess '%s' failed with exit code %s", command, code)
            return code
    return 0


def _default_runner_factory(settings: Settings) -> Runner:
    return CommandRunner(indent=settings.indent)


class Dispatcher:
    """Resolve and execute one operation for a working directory.

    Every environment-dependent collaborator is injected, so the dispatch
    is deterministic given its inputs.

    Args:
        cwd: Working directory the operation is dispatched for.
        config_loader: Returns the merged config for a repository root.
        git_root_locator: Returns the repository root for a directory or
            raises ``RepoRootError``.
        which: Executable lookup used for profile ``bin`` checks.
        runner_factory: Builds the command runner from the merged settings.
        out: Stream for progress lines (defaults to ``sys.stdout``).
    """

    def __init__(
        self,
        *,
        cwd: Path,
        config_loader: Callable[[Path], ResolvedConfig],
        git_root_locator: Callable[[Path], Path] = find_git_root,
        which: Which = shutil.which,
        runner_factory: Callable[[Settings], Runner] = _default_runner_factory,
        out: Optional[TextIO] = None,
    ) -> None:
        self.cwd = Path(cwd).resolve()
        self.config_loader = config_loader
        self.git_root_locator = git_root_locator
        self.which = which
        self.runner_factory = runner_factory
        self.out = out
        self.state = DispatchState.IDLE

    def resolve_roots(self, *, no_searchback: bool = False) -> Tuple[Path, Path]:
        """Return ``(config_root, match_root)``.

        ``config_root`` is where the repository config is read from;
        ``match_root`` bounds the marker-file search. A missing repository
        falls back to the working directory.
        """
        try:
            repo_root = self.git_root_locator(self.cwd)
        except RepoRootError:
            if not no_searchback:
                logger.warning("Current dir is not within a git repo. Using CWD as repo root")
            repo_root = self.cwd
        match_root = self.cwd if no_searchback else repo_root
        return repo_root, match_root

    def dispatch(
        self,
        operation: Operation,
        *,
        dry_run: bool = False,
        no_searchback: bool = False,
    ) -> int:
        """Run ``operation`` and return the process exit status.

        Raises:
            ConfigError: A config source is malformed.
            NoConfigFoundError: No config source exists.
            NoMatchingProfileError: No profile matches.
            NoToolsForOperationError: The matched profile lacks ``operation``.
        """
        self.state = DispatchState.RESOLVING
        config_root, match_root = self.resolve_roots(no_searchback=no_searchback)
        config = self.config_loader(config_root)

        self.state = DispatchState.MATCHING
        profile = find_match(config.profiles, self.cwd, match_root, which=self.which)
        if profile is None:
            self.state = DispatchState.NO_MATCH
            raise NoMatchingProfileError(
                f"No {operation.label} tool matched config rules",
                context={"operation": operation.value, "cwd": str(self.cwd), "repo_root": str(match_root)},
            )

        self.state = DispatchState.HAS_PROFILE
        commands = profile.tools_for(operation)
        if commands is None:
            self.state = DispatchState.NO_TOOLS_FOR_OPERATION
            raise NoToolsForOperationError(
                f"No registered {operation.value} operation for profile '{profile.name}'",
                profile=profile.name,
                operation=operation.value,
            )

        self.state = DispatchState.EXECUTING
        code = run_commands(
            commands,
            self.runner_factory(config.settings),
            dry_run=dry_run,
            out=self.out,
        )
        self.state = DispatchState.SUCCEEDED if code == 0 else DispatchState.COMMAND_FAILED
        return code


__all__ = ["Runner", "DispatchState", "run_commands", "Dispatcher"]
