"""Per-module persisted version markers.

Each vendored module directory carries a small text file recording the tool
version that vendored it. The marker is written into the staged copy before
the staged copy is renamed into place, so a live module never holds a
half-written marker.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from cuevendor.core.utils.io import read_text, write_text
from cuevendor.core.vendors.exceptions import VersionStoreError


class VersionStore:
    """Read and write the version marker of module directories."""

    def __init__(self, version_file: str = "cue.mod/version.txt") -> None:
        self.version_file = version_file

    def marker_path(self, module_dir: Path) -> Path:
        return Path(module_dir) / self.version_file

    def read(self, module_dir: Path) -> Optional[str]:
        """Return the trimmed marker contents, or None when there is no marker.

        Raises:
            VersionStoreError: If the marker exists but cannot be read
        """
        path = self.marker_path(module_dir)
        try:
            return read_text(path).strip()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as exc:
            raise VersionStoreError(
                f"failed to read {str(path)!r}: {exc}",
                context={"path": str(path)},
            ) from exc

    def write(self, module_dir: Path, version: str) -> Path:
        """Record ``version`` as the vendored version of ``module_dir``.

        Raises:
            VersionStoreError: If the marker cannot be written
        """
        path = self.marker_path(module_dir)
        try:
            write_text(path, version)
        except OSError as exc:
            raise VersionStoreError(
                f"failed to write {str(path)!r}: {exc}",
                context={"path": str(path)},
            ) from exc
        return path


__all__ = ["VersionStore"]
