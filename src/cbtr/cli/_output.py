"""CLI output helpers."""
from __future__ import annotations

import sys


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


__all__ = ["print_error"]
