"""Version gating for already-vendored modules.

Run when a plan is loaded: every required module found in the project's
module cache must be at least the required minimum and no newer than the
running tool. Nothing on disk is modified.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from cuevendor.core.utils.paths import locate_module_root
from cuevendor.core.utils.semver import SemVer
from cuevendor.core.vendors.exceptions import (
    IncompatibleModuleError,
    MalformedVersionError,
    MissingVersionMarkerError,
    NeedsUpgradeError,
)
from cuevendor.core.vendors.models import ModuleRequirement, RequirementTable, VendorSettings
from cuevendor.core.vendors.version_store import VersionStore

logger = logging.getLogger(__name__)


class CompatibilityChecker:
    """Check vendored modules against a requirement table and the tool version."""

    def __init__(
        self,
        requirements: RequirementTable,
        tool_version: str,
        settings: Optional[VendorSettings] = None,
    ) -> None:
        self.requirements = requirements
        self.tool_version = tool_version
        self.settings = settings or VendorSettings()
        self.store = VersionStore(self.settings.version_file)

    def check(self, project_root: Optional[Path] = None) -> None:
        """Validate every required module, stopping at the first failure.

        Raises:
            MissingVersionMarkerError: A module has no version marker
            MalformedVersionError: A marker (or the tool version) is not a version
            IncompatibleModuleError: A module is older than its minimum
            NeedsUpgradeError: A module is newer than the running tool
            VersionStoreError: A marker exists but cannot be read
        """
        if self.settings.is_development(self.tool_version):
            logger.debug("development build: skipping module version checks")
            return

        try:
            tool_version = SemVer.parse(self.tool_version)
        except ValueError as exc:
            raise MalformedVersionError(
                f"{self.settings.tool_name} version {self.tool_version!r} is not a valid version",
                context={"tool_version": self.tool_version},
            ) from exc

        if project_root is None:
            project_root, _ = locate_module_root()

        for requirement in self.requirements:
            self._check_module(Path(project_root), requirement, tool_version)

    def _check_module(self, project_root: Path, requirement: ModuleRequirement, tool_version: SemVer) -> None:
        s = self.settings
        module = requirement.module
        module_dir = s.module_path(project_root, module)

        if module_dir.is_symlink():
            logger.debug("skip version check: module %s is symlinked", module)
            return

        raw = self.store.read(module_dir)
        if raw is None:
            raise MissingVersionMarkerError(
                f'package "{module}" is incompatible with this version of {s.tool_name} '
                f"(requires {requirement.minimum} or newer). "
                f"Run `{s.update_command}` to resolve this",
                module=module,
                context={"minimum": str(requirement.minimum)},
            )

        try:
            vendored = SemVer.parse(raw)
        except ValueError as exc:
            marker = self.store.marker_path(module_dir)
            raise MalformedVersionError(
                f'failed to parse version {raw!r} of package "{module}" from {str(marker)!r}. '
                f"Run `{s.update_command}` to resolve this",
                module=module,
                context={"version": raw, "path": str(marker)},
            ) from exc

        if vendored < requirement.minimum:
            raise IncompatibleModuleError(
                f'package "{module}" (version {vendored}) is incompatible with this version of {s.tool_name} '
                f"(requires {requirement.minimum} or newer). "
                f"Run `{s.update_command}` to resolve this",
                module=module,
                context={"version": str(vendored), "minimum": str(requirement.minimum)},
            )

        if vendored > tool_version:
            raise NeedsUpgradeError(
                f'package "{module}" (version {vendored}) requires {s.tool_name} {vendored} or newer '
                f"(running {tool_version}). Run `{s.upgrade_command}` to check for the latest version",
                module=module,
                context={"version": str(vendored), "tool_version": str(tool_version)},
            )

        logger.debug("module %s version %s is compatible", module, vendored)


__all__ = ["CompatibilityChecker"]
