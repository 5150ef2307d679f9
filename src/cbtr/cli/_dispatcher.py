"""
Multicall CLI entry point for cbtr.

The operation comes from the name the program was invoked as (``f``,
``c``, ``b``, ``t``, ``r`` or their long forms). Invoked as ``cbtr`` the
operation is given explicitly as the first positional argument:

    cbtr build --dry-run
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from cbtr.cli._args import add_standard_flags
from cbtr.cli._output import print_error
from cbtr.core.config import ConfigLoader
from cbtr.core.dispatch import Dispatcher
from cbtr.core.exceptions import EXIT_CONFIG_ERROR, EXIT_USAGE_ERROR, CbtrError
from cbtr.core.logging_setup import configure_stdlib_logging, resolve_level
from cbtr.core.operations import Operation, describe_operations, operation_names

logger = logging.getLogger(__name__)

PROGRAM_NAME = "cbtr"


def program_name_from(prog: str) -> str:
    name = Path(prog).name
    if name.lower().endswith(".exe"):
        name = name[:-4]
    return name


def operation_for_program(program_name: str) -> Optional[Operation]:
    """Map the invoked program name to an operation.

    Returns None for the ``cbtr`` program itself (explicit subcommand mode).

    Raises:
        ValueError: If the name is neither ``cbtr`` nor an operation alias.
    """
    if program_name == PROGRAM_NAME:
        return None
    return Operation.from_name(program_name)


def build_parser(program_name: str, *, multicall: bool) -> argparse.ArgumentParser:
    """Build the argument parser.

    Args:
        program_name: Name shown in usage output.
        multicall: True when the operation is implied by ``program_name``,
            in which case no positional operation is accepted.
    """
    parser = argparse.ArgumentParser(
        prog=program_name,
        description="Run the format/check/build/test/run commands configured for this project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    if not multicall:
        parser.add_argument(
            "operation",
            choices=operation_names(),
            metavar="<operation>",
            help=f"One of {describe_operations()}",
        )
    add_standard_flags(parser)
    return parser


def _get_version() -> str:
    try:
        from cbtr import __version__
        return __version__
    except ImportError:
        return "unknown"


def main(argv: list[str] | None = None, prog: str | None = None) -> int:
    """
    Main entry point for the cbtr CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
        prog: Invoked program path (defaults to sys.argv[0])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]
    if prog is None:
        prog = sys.argv[0] if sys.argv and sys.argv[0] else PROGRAM_NAME

    program_name = program_name_from(prog)
    try:
        operation = operation_for_program(program_name)
    except ValueError:
        print_error(
            f"cbtr multicall program invoked with unexpected name '{program_name}'. "
            f"Valid options are {describe_operations()}"
        )
        return EXIT_USAGE_ERROR

    parser = build_parser(program_name, multicall=operation is not None)
    args = parser.parse_args(argv)
    if operation is None:
        operation = Operation.from_name(args.operation)

    configure_stdlib_logging(level=resolve_level(args.verbose))

    try:
        cwd = Path.cwd()
    except OSError as exc:
        logger.error("Unable to determine the current directory: %s", exc)
        return EXIT_CONFIG_ERROR

    dispatcher = Dispatcher(cwd=cwd, config_loader=ConfigLoader(args.config_file))
    try:
        return dispatcher.dispatch(
            operation,
            dry_run=args.dry_run,
            no_searchback=args.no_searchback,
        )
    except CbtrError as exc:
        logger.error("%s", exc)
        return exc.exit_code

