from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from cuevendor.core.utils.io import ensure_directory

_CUEVENDOR_HANDLER: logging.Handler | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str | int) -> int:
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str | int = "WARNING", *, log_path: Optional[Path] = None) -> logging.Handler:
    """Install the cuevendor log handler on the ``cuevendor`` logger.

    Logs go to ``log_path`` when given, otherwise to stderr (stdout stays
    reserved for command output). Calling again replaces the previous
    handler, so repeated CLI invocations in one process do not stack handlers.
    """
    global _CUEVENDOR_HANDLER

    logger = logging.getLogger("cuevendor")
    logger.setLevel(_level_from_name(level))

    if _CUEVENDOR_HANDLER is not None:
        logger.removeHandler(_CUEVENDOR_HANDLER)
        _CUEVENDOR_HANDLER.close()
        _CUEVENDOR_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_directory(resolved.parent)
        handler = logging.FileHandler(resolved, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _CUEVENDOR_HANDLER = handler
    return handler


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _CUEVENDOR_HANDLER
    if _CUEVENDOR_HANDLER is not None:
        logger = logging.getLogger("cuevendor")
        logger.removeHandler(_CUEVENDOR_HANDLER)
        _CUEVENDOR_HANDLER.close()
        _CUEVENDOR_HANDLER = None
    logging.getLogger("cuevendor").setLevel(logging.NOTSET)


__all__ = ["configure_logging", "reset_logging_for_tests", "LOG_FORMAT"]
