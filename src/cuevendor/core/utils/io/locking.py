"""Advisory file locking for single-writer operations."""
from __future__ import annotations

import fcntl
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from .core import ensure_directory

logger = logging.getLogger(__name__)

_THREAD_MUTEXES: dict[str, threading.Lock] = {}
_THREAD_MUTEXES_GUARD = threading.Lock()


class LockUnavailableError(BlockingIOError):
    """Raised when the lock is already held by another process or thread."""


def _thread_mutex(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _THREAD_MUTEXES_GUARD:
        lock = _THREAD_MUTEXES.get(key)
        if lock is None:
            lock = _THREAD_MUTEXES.setdefault(key, threading.Lock())
        return lock


@contextmanager
def acquire_exclusive_lock(lock_path: Path | str) -> Iterator[IO[str]]:
    """Take an exclusive, non-blocking lock on ``lock_path``.

    - Uses ``fcntl.flock`` with ``LOCK_EX | LOCK_NB``: a single attempt, no
      polling. Contention raises ``LockUnavailableError`` immediately.
    - Threads of the same process are excluded through a per-path mutex,
      also acquired without blocking.
    - On exit the lock is released and the lock file is removed. Whether the
      lock is held is decided by ``flock``, never by the file's existence.

    Yields:
        The open lock file, kept locked for the duration of the context.
    """
    target = Path(lock_path)
    ensure_directory(target.parent)

    mutex = _thread_mutex(target)
    if not mutex.acquire(blocking=False):
        raise LockUnavailableError(f"Lock is held by another thread: {target}")

    try:
        fh = open(target, "a+")
        try:
            try:
                fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            except OSError as exc:
                raise LockUnavailableError(f"Lock is held by another process: {target}") from exc

            logger.debug("acquired lock %s", target)
            try:
                yield fh
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
                target.unlink(missing_ok=True)
                logger.debug("released lock %s", target)
        finally:
            fh.close()
    finally:
        mutex.release()


def is_locked(lock_path: Path | str) -> bool:
    """Return True when another holder currently owns ``lock_path``.

    Probes with a non-blocking ``flock`` on a separate descriptor; a missing
    lock file means nobody holds the lock.
    """
    target = Path(lock_path)
    try:
        fh = open(target, "r")
    except FileNotFoundError:
        return False
    with fh:
        try:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            return True
        fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
        return False


__all__ = ["LockUnavailableError", "acquire_exclusive_lock", "is_locked"]
