"""Vendoring transaction.

Copies the bundled modules into a project's module cache
(``cue.mod/pkg``). One run per project at a time, enforced by an advisory
lock inside the cache. Each module is replaced with a three-step protocol:

1. move the live module to ``<module>.old`` (backup)
2. rename the staged module into the live path (swap)
3. delete the backup once the run ends (cleanup)

The replacement is atomic per module only. A failure part-way leaves the
modules processed so far swapped and the rest untouched; re-running is safe
and completes the remaining modules.
"""
from __future__ import annotations

import hashlib
import logging
import os
import shutil
import stat
import tempfile
import threading
from contextlib import ExitStack
from pathlib import Path
from typing import List, Optional

from cuevendor.core.utils.io import LockUnavailableError, acquire_exclusive_lock, ensure_directory
from cuevendor.core.utils.paths import locate_module_root
from cuevendor.core.vendors.bundle import BundleExtractor, ModuleBundle
from cuevendor.core.vendors.exceptions import (
    ExtractError,
    ScaffoldError,
    SwapError,
    VendorCancelledError,
    VendorLockError,
    VersionStoreError,
)
from cuevendor.core.vendors.models import (
    ModuleRequirement,
    ModuleSwapState,
    RequirementTable,
    VendorResult,
    VendorSettings,
)
from cuevendor.core.vendors.scaffold import init_module, refresh_generated_markers
from cuevendor.core.vendors.version_store import VersionStore

logger = logging.getLogger(__name__)


def _raise(exc: OSError) -> None:
    raise exc


def tree_digest(root: Path) -> Optional[str]:
    """Hash the relative paths, modes and contents of every file under ``root``.

    Returns None when the tree cannot be read completely or holds entries
    other than directories, regular files and symlinks (sockets, FIFOs,
    devices). Such a tree never compares equal to a staged one.
    """
    digest = hashlib.sha256()
    root = Path(root)
    try:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames.sort()
            for name in sorted(filenames) + sorted(d for d in dirnames if (Path(dirpath) / d).is_symlink()):
                p = Path(dirpath) / name
                rel = p.relative_to(root).as_posix()
                digest.update(rel.encode("utf-8") + b"\0")
                mode = os.lstat(p).st_mode
                if stat.S_ISLNK(mode):
                    digest.update(b"L" + os.readlink(p).encode("utf-8") + b"\0")
                    continue
                if not stat.S_ISREG(mode):
                    return None
                digest.update(b"X" if mode & stat.S_IXUSR else b"F")
                digest.update(p.read_bytes())
                digest.update(b"\0")
    except OSError as exc:
        logger.debug("cannot hash %s: %s", root, exc)
        return None
    return digest.hexdigest()


def _same_tree(live: Path, staged: Path) -> bool:
    if not live.is_dir():
        return False
    live_digest = tree_digest(live)
    return live_digest is not None and live_digest == tree_digest(staged)


class VendorTransaction:
    """Vendor the bundled modules into a project, one module at a time."""

    def __init__(
        self,
        requirements: RequirementTable,
        bundle: ModuleBundle,
        tool_version: str,
        settings: Optional[VendorSettings] = None,
        *,
        extractor: Optional[BundleExtractor] = None,
    ) -> None:
        self.requirements = requirements
        self.bundle = bundle
        self.tool_version = tool_version
        self.settings = settings or VendorSettings()
        self.extractor = extractor or BundleExtractor(self.settings.bundle_exclude)
        self.store = VersionStore(self.settings.version_file)

    @staticmethod
    def _rename(src: Path, dst: Path) -> None:
        os.rename(src, dst)

    @staticmethod
    def _remove_tree(path: Path) -> None:
        if path.is_symlink() or path.is_file():
            path.unlink(missing_ok=True)
        elif path.exists():
            shutil.rmtree(path)

    def run(
        self,
        project_root: Optional[Path] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> VendorResult:
        """Vendor every required module into ``project_root``.

        Args:
            project_root: Project to vendor into; discovered from the current
                directory when omitted
            cancel: Checked between modules only; when set the run stops
                with ``VendorCancelledError``

        Raises:
            VendorLockError: Another run holds the project lock
            ScaffoldError: The module cache or scaffold cannot be created
            ExtractError: The bundle cannot be staged
            SwapError: A module cannot be renamed into place
            VendorCancelledError: ``cancel`` was set between two modules
        """
        if project_root is None:
            project_root, _ = locate_module_root()
        project_root = Path(project_root).absolute()
        s = self.settings
        cache_dir = s.cache_dir(project_root)
        development = s.is_development(self.tool_version)

        try:
            ensure_directory(cache_dir)
        except OSError as exc:
            raise ScaffoldError(f"cannot create {cache_dir}: {exc}", context={"path": str(cache_dir)}) from exc

        states: List[ModuleSwapState] = [ModuleSwapState(r.module) for r in self.requirements]

        # Cleanups unwind in reverse: backups, staging, then the lock.
        with ExitStack() as stack:
            lock_path = s.lock_path(project_root)
            try:
                stack.enter_context(acquire_exclusive_lock(lock_path))
            except LockUnavailableError as exc:
                raise VendorLockError(
                    f"another {s.tool_name} process is vendoring into {project_root} "
                    f"(lock {lock_path} is held). Run `{s.update_command}` again once it finishes",
                    context={"lock": str(lock_path)},
                ) from exc
            except OSError as exc:
                raise VendorLockError(
                    f"cannot lock {lock_path}: {exc}",
                    context={"lock": str(lock_path)},
                ) from exc

            init_module(project_root, settings=s)
            refresh_generated_markers(cache_dir, s)

            logger.debug("vendoring packages into %s", project_root)

            try:
                staging = Path(tempfile.mkdtemp(prefix=s.staging_prefix, dir=cache_dir))
            except OSError as exc:
                raise ExtractError(f"cannot create staging directory in {cache_dir}: {exc}") from exc
            stack.callback(shutil.rmtree, staging, ignore_errors=True)

            self.extractor.extract(self.bundle, staging)

            for requirement, state in zip(self.requirements, states):
                if cancel is not None and cancel.is_set():
                    raise VendorCancelledError(
                        f"vendoring cancelled before {requirement.module}. "
                        f"Run `{s.update_command}` to vendor the remaining modules",
                        states=[st.snapshot() for st in states],
                        context={"module": requirement.module},
                    )
                self._vendor_module(stack, project_root, staging, requirement, state, development, states)

            result = VendorResult(
                project_root=project_root,
                tool_version=self.tool_version,
                modules=tuple(st.snapshot() for st in states),
            )

        return result

    def _vendor_module(
        self,
        stack: ExitStack,
        project_root: Path,
        staging: Path,
        requirement: ModuleRequirement,
        state: ModuleSwapState,
        development: bool,
        states: List[ModuleSwapState],
    ) -> None:
        s = self.settings
        module = requirement.module
        live = s.module_path(project_root, module)
        staged = staging / module
        backup = live.with_name(live.name + s.backup_suffix)

        if live.is_symlink():
            logger.warning("skip vendoring: module %s is symlinked", module)
            state.skipped = True
            return

        if not staged.is_dir():
            raise ExtractError(
                f'package "{module}" is missing from the module bundle',
                context={"module": module},
            )

        if not development:
            try:
                self.store.write(staged, self.tool_version)
            except VersionStoreError as exc:
                raise ExtractError(str(exc), context={"module": module}) from exc
        state.staged = True

        if _same_tree(live, staged):
            logger.debug("module %s is already up to date", module)
            state.up_to_date = True
            return

        def _fail(step: str, exc: OSError) -> SwapError:
            return SwapError(
                f'cannot {step} package "{module}": {exc}. '
                f"Run `{s.update_command}` to vendor the remaining modules",
                module=module,
                states=[st.snapshot() for st in states],
                context={"version": self.tool_version},
            )

        try:
            self._remove_tree(backup)
        except OSError as exc:
            raise _fail("remove stale backup of", exc) from exc

        try:
            self._rename(live, backup)
            state.backed_up = True
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise _fail("back up", exc) from exc

        try:
            self._rename(staged, live)
        except OSError as exc:
            if state.backed_up:
                try:
                    self._rename(backup, live)
                    state.backed_up = False
                except OSError:
                    logger.error("could not restore %s from %s", live, backup)
            raise _fail("swap in", exc) from exc

        state.swapped = True
        if state.backed_up:
            stack.callback(shutil.rmtree, backup, ignore_errors=True)
        logger.debug("vendored %s", module)


__all__ = ["VendorTransaction", "tree_digest"]
