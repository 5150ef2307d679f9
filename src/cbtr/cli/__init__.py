"""
cbtr CLI package.

- _dispatcher: multicall entry point (program name or explicit operation)
- _args: common argument registration helpers
- _output: output helpers
"""
from ._args import (
    add_config_file_flag,
    add_dry_run_flag,
    add_no_searchback_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._output import print_error

__all__ = [
    "add_config_file_flag",
    "add_dry_run_flag",
    "add_no_searchback_flag",
    "add_standard_flags",
    "add_verbose_flag",
    "print_error",
]
