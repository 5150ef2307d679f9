"""
cbtr - project-agnostic format/check/build/test/run dispatcher

Invoked as one of its aliases, cbtr inspects the working directory and the
enclosing repository, picks the first configured profile whose rules match,
and runs the commands that profile registers for the requested operation.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
