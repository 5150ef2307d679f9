from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

LOG_LEVEL_ENV = "CBTR_LOG"
LOGGER_NAME = "cbtr"

_CBTR_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    try:
        return int(getattr(logging, name.upper()))
    except Exception:
        return logging.INFO


def resolve_level(verbose: bool = False) -> int:
    """``--verbose`` wins, then $CBTR_LOG, then INFO."""
    if verbose:
        return logging.DEBUG
    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level and env_level.strip():
        return _level_from_name(env_level.strip())
    return logging.INFO


def configure_stdlib_logging(*, level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Send ``cbtr.*`` log records to stderr as ``[LEVEL] message``.

    Idempotent per-process: a second call replaces the handler installed by
    the first.
    """
    global _CBTR_HANDLER

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if _CBTR_HANDLER is not None:
        logger.removeHandler(_CBTR_HANDLER)
        _CBTR_HANDLER.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    _CBTR_HANDLER = handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler and restore propagation."""
    global _CBTR_HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    if _CBTR_HANDLER is not None:
        logger.removeHandler(_CBTR_HANDLER)
        _CBTR_HANDLER.close()
        _CBTR_HANDLER = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = [
    "LOG_LEVEL_ENV",
    "resolve_level",
    "configure_stdlib_logging",
    "reset_stdlib_logging_for_tests",
]
