"""Discovery of the CUE module root for a working directory."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

MODULE_MARKER_DIR = "cue.mod"


def _has_marker(directory: Path, marker: str) -> bool:
    try:
        os.stat(directory / marker)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError:
        # Present but unreadable still marks a module root.
        return True
    return True


def locate_module_root(
    start: Optional[Path | str] = None,
    *,
    marker: str = MODULE_MARKER_DIR,
) -> tuple[Path, bool]:
    """Find the nearest ancestor of ``start`` that contains ``marker``.

    Walks from ``start`` (the current working directory when omitted) up to
    and including the filesystem root. Nothing is created.

    Returns:
        ``(root, True)`` for the first directory holding the marker, or
        ``(start, False)`` when no ancestor has one.
    """
    origin = Path(start) if start is not None else Path.cwd()
    origin = origin.expanduser().absolute()

    for candidate in (origin, *origin.parents):
        if _has_marker(candidate, marker):
            return candidate, True

    return origin, False


__all__ = ["MODULE_MARKER_DIR", "locate_module_root"]
