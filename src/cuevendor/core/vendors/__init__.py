"""cuevendor vendor subsystem.

Copies the bundled CUE modules into a project's module cache and checks
already-vendored modules for compatibility.

Key components:
- VendorTransaction: Lock, stage and swap modules into cue.mod/pkg
- CompatibilityChecker: Gate vendored modules on minimum/tool versions
- BundleExtractor: Stage a ModuleBundle into a directory
- VersionStore: Read/write per-module version markers
"""
from __future__ import annotations

from cuevendor.core.vendors.bundle import (
    BundleEntry,
    BundleExtractor,
    DirectoryBundle,
    InMemoryBundle,
    ModuleBundle,
)
from cuevendor.core.vendors.compatibility import CompatibilityChecker
from cuevendor.core.vendors.exceptions import (
    CompatibilityError,
    ExtractError,
    IncompatibleModuleError,
    MalformedVersionError,
    MissingVersionMarkerError,
    NeedsUpgradeError,
    ScaffoldError,
    SwapError,
    VendorCancelledError,
    VendorError,
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
from cuevendor.core.vendors.transaction import VendorTransaction
from cuevendor.core.vendors.version_store import VersionStore

__all__ = [
    # Transaction
    "VendorTransaction",
    # Compatibility
    "CompatibilityChecker",
    # Bundles
    "BundleEntry",
    "BundleExtractor",
    "DirectoryBundle",
    "InMemoryBundle",
    "ModuleBundle",
    # Markers and scaffold
    "VersionStore",
    "init_module",
    "refresh_generated_markers",
    # Models
    "ModuleRequirement",
    "ModuleSwapState",
    "RequirementTable",
    "VendorResult",
    "VendorSettings",
    # Exceptions
    "VendorError",
    "VendorLockError",
    "ScaffoldError",
    "ExtractError",
    "SwapError",
    "VendorCancelledError",
    "VersionStoreError",
    "CompatibilityError",
    "MissingVersionMarkerError",
    "MalformedVersionError",
    "IncompatibleModuleError",
    "NeedsUpgradeError",
]
