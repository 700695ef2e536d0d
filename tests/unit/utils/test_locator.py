from __future__ import annotations

from pathlib import Path

from cuevendor.core.utils.paths import MODULE_MARKER_DIR, locate_module_root


def test_finds_marker_in_start_directory(tmp_path: Path) -> None:
    (tmp_path / MODULE_MARKER_DIR).mkdir()
    root, found = locate_module_root(tmp_path)
    assert found is True
    assert root == tmp_path.absolute()


def test_walks_up_to_nearest_ancestor(tmp_path: Path) -> None:
    (tmp_path / MODULE_MARKER_DIR).mkdir()
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    root, found = locate_module_root(nested)
    assert found is True
    assert root == tmp_path.absolute()


def test_nearest_marker_wins(tmp_path: Path) -> None:
    (tmp_path / MODULE_MARKER_DIR).mkdir()
    inner = tmp_path / "inner"
    (inner / MODULE_MARKER_DIR).mkdir(parents=True)
    deeper = inner / "x"
    deeper.mkdir()

    root, found = locate_module_root(deeper)
    assert found is True
    assert root == inner.absolute()


def test_marker_file_also_counts(tmp_path: Path) -> None:
    (tmp_path / MODULE_MARKER_DIR).write_text("not a dir")
    root, found = locate_module_root(tmp_path)
    assert found is True
    assert root == tmp_path.absolute()


def test_not_found_returns_start(tmp_path: Path) -> None:
    start = tmp_path / "project"
    start.mkdir()
    root, found = locate_module_root(start, marker="no-such-marker-dir-xyz")
    assert found is False
    assert root == start.absolute()
    # Nothing is created by discovery.
    assert list(start.iterdir()) == []


def test_defaults_to_current_directory(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / MODULE_MARKER_DIR).mkdir()
    sub = tmp_path / "sub"
    sub.mkdir()
    monkeypatch.chdir(sub)

    root, found = locate_module_root()
    assert found is True
    assert root.resolve() == tmp_path.resolve()
