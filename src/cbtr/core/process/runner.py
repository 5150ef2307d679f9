"""Run one external command with live, prefixed output streaming.

The child inherits the environment and working directory. Its stdout and
stderr are drained by two reader threads so neither pipe can fill up while
the other is being read. Each complete line is written to the matching sink
with the configured indent. Lines keep their order within a stream; no order
is imposed between the two streams.
"""
from __future__ import annotations

import logging
import shutil
import subprocess
import sys
import threading
from typing import IO, Callable, List, Optional, Sequence, TextIO

from cbtr.core.config.models import DEFAULT_INDENT
from cbtr.core.exceptions import CommandNotFoundError, NoExitCodeError, OutputError, SpawnError
from cbtr.core.profiles import Which

logger = logging.getLogger(__name__)


def split_command(command: str) -> List[str]:
    """Split a command string on whitespace. Quoting is not interpreted."""
    return command.split()


class _StreamPump(threading.Thread):
    """Copy lines from a child pipe to a sink until EOF."""

    def __init__(self, source: IO[str], emit: Callable[[str], None], name: str) -> None:
        super().__init__(name=f"cbtr-{name}", daemon=True)
        self.stream = name
        self._source = source
        self._emit = emit
        self.error: Optional[Exception] = None

    def run(self) -> None:
        for line in iter(self._source.readline, ""):
            if self.error is not None:
                # Keep draining so the child never blocks on a full pipe.
                continue
            try:
                self._emit(line.rstrip("\r\n"))
            except Exception as exc:
                self.error = exc


class CommandRunner:
    """Spawn commands and stream their output with a fixed prefix.

    Args:
        indent: Prefix written before every child output line.
        stdout: Sink for child stdout lines (defaults to ``sys.stdout`` at run time).
        stderr: Sink for child stderr lines (defaults to ``sys.stderr`` at run time).
        which: Executable lookup used to resolve the program name.
    """

    def __init__(
        self,
        *,
        indent: str = DEFAULT_INDENT,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        which: Which = shutil.which,
    ) -> None:
        self.indent = indent
        self._stdout = stdout
        self._stderr = stderr
        self._which = which

    def _writer(self, sink: TextIO) -> Callable[[str], None]:
        def emit(line: str) -> None:
            sink.write(f"{self.indent}{line}\n")
            sink.flush()

        return emit

    def run(self, tokens: Sequence[str]) -> int:
        """Run ``tokens`` and return the child's exit code.

        Raises:
            ValueError: If ``tokens`` is empty.
            CommandNotFoundError: If ``tokens[0]`` does not resolve on PATH.
            SpawnError: If the process could not be started.
            NoExitCodeError: If the process ended without a numeric exit code.
            OutputError: If a line could not be written to its sink.
        """
        argv = [str(t) for t in tokens]
        if not argv:
            raise ValueError("command is empty")

        program = argv[0]
        binary = self._which(program)
        if binary is None:
            raise CommandNotFoundError(
                f"Couldn't find {program} on $PATH",
                context={"command": program},
            )

        out = self._stdout if self._stdout is not None else sys.stdout
        err = self._stderr if self._stderr is not None else sys.stderr

        logger.debug("cmd: %s, args: %s", binary, argv[1:])
        try:
            proc = subprocess.Popen(
                [binary, *argv[1:]],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            raise SpawnError(
                f"Unable to run '{binary}': {exc}",
                context={"command": program, "binary": str(binary)},
            ) from exc

        with proc:
            assert proc.stdout is not None and proc.stderr is not None
            pumps = [
                _StreamPump(proc.stdout, self._writer(out), "stdout"),
                _StreamPump(proc.stderr, self._writer(err), "stderr"),
            ]
            for pump in pumps:
                pump.start()
            for pump in pumps:
                pump.join()
            returncode = proc.wait()

        for pump in pumps:
            if pump.error is not None:
                raise OutputError(
                    f"Unable to write {pump.stream} of '{program}': {pump.error}",
                    context={"command": program, "stream": pump.stream, "returncode": returncode},
                ) from pump.error

        if returncode < 0:
            raise NoExitCodeError(
                f"'{program}' terminated by signal {-returncode} without an exit code",
                context={"command": program, "signal": -returncode},
            )
        return returncode


__all__ = ["split_command", "CommandRunner"]
