"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path

from cuevendor.core.utils.paths import locate_module_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from args or auto-detect.

    Without ``--repo-root`` the nearest ancestor holding ``cue.mod`` is used,
    falling back to the current directory.
    """
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    root, _ = locate_module_root()
    return root


__all__ = ["get_repo_root"]
