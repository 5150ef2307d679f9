"""Child process execution."""
from .runner import CommandRunner, split_command

__all__ = ["CommandRunner", "split_command"]
