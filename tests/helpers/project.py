"""Helpers for building and inspecting project module caches."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from cuevendor.core.vendors.models import VendorSettings


def cache_dir(project_root: Path, settings: VendorSettings | None = None) -> Path:
    return (settings or VendorSettings()).cache_dir(project_root)


def write_module(
    project_root: Path,
    module: str,
    version: str | None,
    *,
    settings: VendorSettings | None = None,
    files: Dict[str, str] | None = None,
) -> Path:
    """Create a vendored module directory, optionally with a version marker."""
    s = settings or VendorSettings()
    module_dir = s.module_path(project_root, module)
    module_dir.mkdir(parents=True, exist_ok=True)
    for rel, content in (files or {"main.cue": "package main\n"}).items():
        target = module_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    if version is not None:
        marker = module_dir / s.version_file
        marker.parent.mkdir(parents=True, exist_ok=True)
        marker.write_text(version, encoding="utf-8")
    return module_dir


def snapshot_tree(root: Path) -> Dict[str, bytes]:
    """Map relative file path to contents for every regular file under root."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file() and not p.is_symlink()
    }


def leftovers(project_root: Path, settings: VendorSettings | None = None) -> List[str]:
    """Names of staging/backup/lock artifacts left in the module cache."""
    s = settings or VendorSettings()
    cache = s.cache_dir(project_root)
    if not cache.exists():
        return []
    return sorted(
        p.name
        for p in cache.iterdir()
        if p.name.startswith(s.staging_prefix)
        or p.name.endswith(s.backup_suffix)
        or p.name == s.lock_file
    )
