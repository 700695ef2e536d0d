"""Vendor data models.

Provides immutable dataclasses for the requirement table, subsystem
settings and per-module transaction state.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Iterator

from cuevendor import DEVELOPMENT_VERSION
from cuevendor.core.utils.semver import SemVer


@dataclass(frozen=True, slots=True)
class ModuleRequirement:
    """Minimum version of a bundled module this tool works with.

    Attributes:
        module: Module identifier (e.g. ``dagger.io``)
        minimum: Oldest acceptable vendored version
    """

    module: str
    minimum: SemVer

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModuleRequirement:
        """Create from a ``{module, minimum}`` mapping."""
        return cls(module=str(data["module"]), minimum=SemVer.parse(str(data["minimum"])))

    def to_dict(self) -> dict[str, Any]:
        return {"module": self.module, "minimum": str(self.minimum)}


class RequirementTable:
    """Ordered, immutable set of module requirements.

    Order is significant: modules are checked and swapped in table order.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[ModuleRequirement]) -> None:
        items = tuple(entries)
        if not items:
            raise ValueError("Requirement table must not be empty")
        seen: set[str] = set()
        for item in items:
            if item.module in seen:
                raise ValueError(f"Duplicate module in requirement table: {item.module}")
            seen.add(item.module)
        self._entries = items

    @classmethod
    def from_config(cls, data: Iterable[dict[str, Any]]) -> RequirementTable:
        return cls(ModuleRequirement.from_dict(item) for item in data)

    def __iter__(self) -> Iterator[ModuleRequirement]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RequirementTable({list(self._entries)!r})"

    @property
    def modules(self) -> tuple[str, ...]:
        return tuple(e.module for e in self._entries)

    def get(self, module: str) -> ModuleRequirement | None:
        for entry in self._entries:
            if entry.module == module:
                return entry
        return None


@dataclass(frozen=True, slots=True)
class VendorSettings:
    """File names and conventions used when vendoring into a project.

    Attributes:
        tool_name: Name used in user-facing messages
        development_version: Tool version that disables version gating
        module_dir: Project marker directory (``cue.mod``)
        module_file: Project descriptor inside ``module_dir``
        pkg_dir: Module cache directory inside ``module_dir``
        lock_file: Lock file name inside the module cache
        version_file: Marker path relative to each vendored module
        staging_prefix: Prefix of the staging directory
        backup_suffix: Suffix of a module's backup directory
        bundle_exclude: Bundle subtrees never extracted
        generated_header: First line of files this tool generates
        legacy_generated_headers: Headers identifying removable legacy files
        update_command: Remediation for stale or missing modules
        upgrade_command: Remediation when the tool itself is too old
    """

    tool_name: str = "cuevendor"
    development_version: str = DEVELOPMENT_VERSION
    module_dir: str = "cue.mod"
    module_file: str = "module.cue"
    pkg_dir: str = "pkg"
    lock_file: str = "dagger.lock"
    version_file: str = "cue.mod/version.txt"
    staging_prefix: str = "vendor-"
    backup_suffix: str = ".old"
    bundle_exclude: tuple[str, ...] = ("cue.mod/pkg",)
    generated_header: str = "# generated by cuevendor"
    legacy_generated_headers: tuple[str, ...] = ("# generated by dagger", "# generated by cuevendor")
    update_command: str = "cuevendor project update"
    upgrade_command: str = "cuevendor version"

    def module_root_dir(self, project_root: Path) -> Path:
        return Path(project_root) / self.module_dir

    def cache_dir(self, project_root: Path) -> Path:
        return self.module_root_dir(project_root) / self.pkg_dir

    def module_path(self, project_root: Path, module: str) -> Path:
        return self.cache_dir(project_root) / module

    def lock_path(self, project_root: Path) -> Path:
        return self.cache_dir(project_root) / self.lock_file

    def is_development(self, tool_version: str) -> bool:
        return tool_version == self.development_version


@dataclass(slots=True)
class ModuleSwapState:
    """How far one module got through the backup/replace/cleanup protocol.

    Attributes:
        module: Module identifier
        skipped: Live directory is a symlink and was left alone
        up_to_date: Live tree already matched the staged tree
        staged: Staged tree is complete (marker written)
        backed_up: Previous live tree was moved to the backup path
        swapped: Staged tree was renamed into the live path
    """

    module: str
    skipped: bool = False
    up_to_date: bool = False
    staged: bool = False
    backed_up: bool = False
    swapped: bool = False

    def snapshot(self) -> ModuleSwapState:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "module": self.module,
            "skipped": self.skipped,
            "up_to_date": self.up_to_date,
            "staged": self.staged,
            "backed_up": self.backed_up,
            "swapped": self.swapped,
        }


@dataclass(frozen=True, slots=True)
class VendorResult:
    """Result of a completed vendoring run.

    Attributes:
        project_root: Project the modules were vendored into
        tool_version: Tool version written into the markers
        modules: Final state of every required module, in table order
    """

    project_root: Path
    tool_version: str
    modules: tuple[ModuleSwapState, ...] = field(default_factory=tuple)

    @property
    def swapped(self) -> tuple[str, ...]:
        return tuple(s.module for s in self.modules if s.swapped)

    @property
    def skipped(self) -> tuple[str, ...]:
        return tuple(s.module for s in self.modules if s.skipped)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_root": str(self.project_root),
            "tool_version": self.tool_version,
            "modules": [s.to_dict() for s in self.modules],
        }


__all__ = [
    "ModuleRequirement",
    "RequirementTable",
    "VendorSettings",
    "ModuleSwapState",
    "VendorResult",
]
