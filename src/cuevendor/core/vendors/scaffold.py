"""Project scaffolding for the CUE module cache.

Creates ``cue.mod/``, its ``module.cue`` descriptor and ``cue.mod/pkg/`` on
first use, and maintains the generated-file markers of the module cache.
All operations are idempotent.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from cuevendor.core.utils.io import ensure_directory, write_text
from cuevendor.core.vendors.exceptions import ScaffoldError
from cuevendor.core.vendors.models import VendorSettings

logger = logging.getLogger(__name__)


def init_module(
    project_root: Path,
    module_name: str = "",
    settings: Optional[VendorSettings] = None,
) -> Path:
    """Ensure the project's CUE module scaffold exists.

    An existing descriptor is never rewritten, whatever ``module_name`` says.

    Returns:
        Path to the ``cue.mod`` directory

    Raises:
        ScaffoldError: If a directory or the descriptor cannot be created
    """
    s = settings or VendorSettings()
    mod_dir = s.module_root_dir(Path(project_root).absolute())
    try:
        ensure_directory(mod_dir)

        mod_file = mod_dir / s.module_file
        if not mod_file.exists():
            logger.debug("initializing %s in %s", s.module_dir, project_root)
            write_text(mod_file, f"module: {json.dumps(module_name, ensure_ascii=False)}")

        ensure_directory(mod_dir / s.pkg_dir)
    except OSError as exc:
        raise ScaffoldError(
            f"cannot initialize {mod_dir}: {exc}",
            context={"path": str(mod_dir)},
        ) from exc
    return mod_dir


def refresh_generated_markers(cache_dir: Path, settings: Optional[VendorSettings] = None) -> None:
    """Drop legacy ``.gitignore`` files and (re)write ``.gitattributes``.

    A ``.gitignore`` is removed only when it starts with one of the legacy
    generated headers, so hand-written ignore files survive.

    Raises:
        ScaffoldError: If a legacy ignore file cannot be removed or the
            attribute marker cannot be written
    """
    s = settings or VendorSettings()
    cache_dir = Path(cache_dir)

    gitignore = cache_dir / ".gitignore"
    headers = tuple(h.encode("utf-8") for h in s.legacy_generated_headers)
    try:
        contents = gitignore.read_bytes()
    except OSError:
        contents = None
    if contents is not None and contents.startswith(headers):
        logger.debug("removing legacy %s", gitignore)
        try:
            gitignore.unlink(missing_ok=True)
        except OSError as exc:
            raise ScaffoldError(
                f"cannot remove {gitignore}: {exc}",
                context={"path": str(gitignore)},
            ) from exc

    try:
        write_text(cache_dir / ".gitattributes", f"{s.generated_header}\n** linguist-generated=true\n")
    except OSError as exc:
        raise ScaffoldError(
            f"cannot write {cache_dir / '.gitattributes'}: {exc}",
            context={"path": str(cache_dir)},
        ) from exc


__all__ = ["init_module", "refresh_generated_markers"]
