from __future__ import annotations

from pathlib import Path

import pytest

from cuevendor.core.vendors.exceptions import VersionStoreError
from cuevendor.core.vendors.version_store import VersionStore


def test_write_then_read(tmp_path: Path) -> None:
    store = VersionStore()
    path = store.write(tmp_path / "dagger.io", "0.2.20")
    assert path == tmp_path / "dagger.io" / "cue.mod" / "version.txt"
    assert path.read_text() == "0.2.20"
    assert store.read(tmp_path / "dagger.io") == "0.2.20"


def test_read_trims_whitespace(tmp_path: Path) -> None:
    marker = tmp_path / "cue.mod" / "version.txt"
    marker.parent.mkdir()
    marker.write_text("  0.2.11\n")
    assert VersionStore().read(tmp_path) == "0.2.11"


def test_missing_marker_is_none(tmp_path: Path) -> None:
    assert VersionStore().read(tmp_path) is None
    assert VersionStore().read(tmp_path / "does-not-exist") is None


def test_marker_parent_is_a_file(tmp_path: Path) -> None:
    (tmp_path / "cue.mod").write_text("oops")
    assert VersionStore().read(tmp_path) is None


def test_unreadable_marker_raises(tmp_path: Path) -> None:
    marker = tmp_path / "cue.mod" / "version.txt"
    marker.mkdir(parents=True)
    with pytest.raises(VersionStoreError) as exc:
        VersionStore().read(tmp_path)
    assert str(marker) in str(exc.value)


def test_write_failure_raises(tmp_path: Path) -> None:
    (tmp_path / "cue.mod").write_text("not a directory")
    with pytest.raises(VersionStoreError):
        VersionStore().write(tmp_path, "0.2.20")


def test_custom_marker_location(tmp_path: Path) -> None:
    store = VersionStore("VERSION")
    store.write(tmp_path, "1.0.0")
    assert (tmp_path / "VERSION").read_text() == "1.0.0"
