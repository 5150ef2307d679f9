"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse
from pathlib import Path


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Print what command would be ran without actually running it",
    )


def add_no_searchback_flag(parser: argparse.ArgumentParser) -> None:
    """Add --no-searchback flag (match rules against the working directory only)."""
    parser.add_argument(
        "--no-searchback",
        action="store_true",
        help="Treat the current directory as the repository root when matching rules",
    )


def add_config_file_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config-file flag for user config override.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Use this file instead of the user config",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every invocation accepts.

    Adds: --dry-run, --no-searchback, --config-file, --verbose
    """
    add_dry_run_flag(parser)
    add_no_searchback_flag(parser)
    add_config_file_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_dry_run_flag",
    "add_no_searchback_flag",
    "add_config_file_flag",
    "add_verbose_flag",
    "add_standard_flags",
]
