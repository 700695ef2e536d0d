"""Module bundles and their extraction into a staging directory.

A bundle is a read-only tree of files keyed by POSIX relative path. The
tool ships its modules as package data (``cuevendor/data/bundle``); tests
and embedders can substitute an ``InMemoryBundle``.
"""
from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, Mapping, Protocol, Sequence, runtime_checkable

from cuevendor.core.vendors.exceptions import ExtractError

logger = logging.getLogger(__name__)

FILE = "file"
DIRECTORY = "dir"
SYMLINK = "symlink"


@dataclass(frozen=True, slots=True)
class BundleEntry:
    """One entry of a bundle.

    Attributes:
        path: POSIX path relative to the bundle root
        kind: ``file``, ``dir`` or ``symlink``
        executable: Whether the file should be runnable once extracted
    """

    path: str
    kind: str = FILE
    executable: bool = False

    @property
    def is_file(self) -> bool:
        return self.kind == FILE


@runtime_checkable
class ModuleBundle(Protocol):
    """Read-only source of module files."""

    def iter_entries(self) -> Iterator[BundleEntry]:
        ...

    def read_bytes(self, path: str) -> bytes:
        ...


class DirectoryBundle:
    """Bundle backed by a directory tree on disk."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @classmethod
    def packaged(cls) -> DirectoryBundle:
        """The module bundle shipped with cuevendor."""
        from cuevendor.data import get_data_path

        return cls(get_data_path("bundle"))

    def iter_entries(self) -> Iterator[BundleEntry]:
        if not self.root.is_dir():
            raise FileNotFoundError(f"Bundle root does not exist: {self.root}")
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames.sort()
            base = Path(dirpath)
            for name in dirnames:
                p = base / name
                kind = SYMLINK if p.is_symlink() else DIRECTORY
                yield BundleEntry(p.relative_to(self.root).as_posix(), kind)
            for name in sorted(filenames):
                p = base / name
                if p.is_symlink():
                    yield BundleEntry(p.relative_to(self.root).as_posix(), SYMLINK)
                    continue
                mode = p.stat().st_mode
                yield BundleEntry(
                    p.relative_to(self.root).as_posix(),
                    FILE,
                    executable=bool(mode & stat.S_IXUSR),
                )

    def read_bytes(self, path: str) -> bytes:
        return (self.root / path).read_bytes()


class InMemoryBundle:
    """Bundle backed by a mapping of relative path to file contents."""

    def __init__(self, files: Mapping[str, bytes | str], *, executables: Iterable[str] = ()) -> None:
        self._files = {
            path: content.encode("utf-8") if isinstance(content, str) else bytes(content)
            for path, content in files.items()
        }
        self._executables = frozenset(executables)

    def iter_entries(self) -> Iterator[BundleEntry]:
        for path in sorted(self._files):
            yield BundleEntry(path, FILE, executable=path in self._executables)

    def read_bytes(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError:
            raise FileNotFoundError(f"Not in bundle: {path}") from None


def _is_excluded(parts: Sequence[str], excluded: Sequence[tuple[str, ...]]) -> bool:
    for pattern in excluded:
        n = len(pattern)
        for i in range(len(parts) - n + 1):
            if tuple(parts[i : i + n]) == pattern:
                return True
    return False


class BundleExtractor:
    """Copy the regular files of a bundle into a destination directory.

    Files under any ``exclude`` subtree (matched as a run of path segments
    anywhere in the path) are skipped; the bundle's own ``cue.mod/pkg``
    development links must never reach a project.
    """

    def __init__(self, exclude: Iterable[str] = ("cue.mod/pkg",)) -> None:
        self.exclude = tuple(tuple(PurePosixPath(p).parts) for p in exclude)

    def _target(self, dest: Path, rel: str) -> Path:
        pure = PurePosixPath(rel)
        if pure.is_absolute() or ".." in pure.parts:
            raise ExtractError(f"{rel}: unsafe path in bundle", context={"path": rel})
        return dest.joinpath(*pure.parts)

    def extract(self, bundle: ModuleBundle, dest: Path) -> int:
        """Write every bundled file to ``dest``; return the number written.

        Raises:
            ExtractError: If the bundle cannot be read or ``dest`` written
        """
        dest = Path(dest)
        written = 0
        try:
            entries = sorted(bundle.iter_entries(), key=lambda e: e.path)
        except OSError as exc:
            raise ExtractError(f"cannot list module bundle: {exc}") from exc

        for entry in entries:
            if not entry.is_file:
                continue
            if _is_excluded(PurePosixPath(entry.path).parts, self.exclude):
                continue

            target = self._target(dest, entry.path)
            try:
                contents = bundle.read_bytes(entry.path)
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(contents)
                # Keep embedded shell scripts runnable.
                target.chmod(0o755 if entry.executable else 0o644)
            except OSError as exc:
                raise ExtractError(f"{entry.path}: {exc}", context={"path": entry.path}) from exc
            written += 1

        logger.debug("extracted %d bundled files into %s", written, dest)
        return written


__all__ = [
    "BundleEntry",
    "ModuleBundle",
    "DirectoryBundle",
    "InMemoryBundle",
    "BundleExtractor",
]
