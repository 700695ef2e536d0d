"""File-system I/O helpers: directories, text files and advisory locks."""
from __future__ import annotations

from .core import PathLike, atomic_write, ensure_directory, read_text, write_text
from .locking import LockUnavailableError, acquire_exclusive_lock, is_locked

__all__ = [
    "PathLike",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
    "LockUnavailableError",
    "acquire_exclusive_lock",
    "is_locked",
]
