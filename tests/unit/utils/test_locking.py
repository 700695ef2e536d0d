from __future__ import annotations

import fcntl
import threading
from pathlib import Path

import pytest

from cuevendor.core.utils.io import LockUnavailableError, acquire_exclusive_lock, is_locked


def test_lock_file_removed_on_release(tmp_path: Path) -> None:
    lock = tmp_path / "cache" / "dagger.lock"
    with acquire_exclusive_lock(lock) as fh:
        assert lock.exists()
        assert is_locked(lock) is True
        assert not fh.closed
    assert not lock.exists()
    assert is_locked(lock) is False


def test_reacquire_after_release(tmp_path: Path) -> None:
    lock = tmp_path / "dagger.lock"
    with acquire_exclusive_lock(lock):
        pass
    with acquire_exclusive_lock(lock):
        assert lock.exists()


def test_contention_from_other_descriptor_fails_fast(tmp_path: Path) -> None:
    lock = tmp_path / "dagger.lock"
    with open(lock, "a+") as holder:
        fcntl.flock(holder.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        try:
            with pytest.raises(LockUnavailableError):
                with acquire_exclusive_lock(lock):
                    pass
        finally:
            fcntl.flock(holder.fileno(), fcntl.LOCK_UN)
    # The failed attempt must not delete someone else's lock file.
    assert lock.exists()


def test_contention_between_threads(tmp_path: Path) -> None:
    lock = tmp_path / "dagger.lock"
    acquired = threading.Event()
    release = threading.Event()
    errors: list[BaseException] = []

    def holder() -> None:
        with acquire_exclusive_lock(lock):
            acquired.set()
            release.wait(5)

    t = threading.Thread(target=holder)
    t.start()
    try:
        assert acquired.wait(5)
        try:
            with acquire_exclusive_lock(lock):
                pass
        except LockUnavailableError as exc:
            errors.append(exc)
    finally:
        release.set()
        t.join(5)

    assert len(errors) == 1
    assert not lock.exists()


def test_stale_lock_file_is_not_a_held_lock(tmp_path: Path) -> None:
    lock = tmp_path / "dagger.lock"
    lock.write_text("")
    assert is_locked(lock) is False
    with acquire_exclusive_lock(lock):
        assert is_locked(lock) is True
