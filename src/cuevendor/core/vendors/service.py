"""Configured entry points for vendoring and compatibility checks.

Builds the transaction and checker from ``ConfigManager`` and the packaged
module bundle. Library callers that need different requirements or a
synthetic bundle construct the components directly instead.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from cuevendor.core.config import ConfigManager
from cuevendor.core.vendors.bundle import DirectoryBundle, ModuleBundle
from cuevendor.core.vendors.compatibility import CompatibilityChecker
from cuevendor.core.vendors.models import VendorResult
from cuevendor.core.vendors.scaffold import init_module
from cuevendor.core.vendors.transaction import VendorTransaction


def vendor(
    project_root: Optional[Path] = None,
    *,
    config: Optional[ConfigManager] = None,
    bundle: Optional[ModuleBundle] = None,
) -> VendorResult:
    """Vendor the bundled modules into ``project_root``."""
    cfg = config or ConfigManager()
    transaction = VendorTransaction(
        cfg.requirements(),
        bundle or DirectoryBundle.packaged(),
        cfg.tool_version(),
        cfg.vendor_settings(),
    )
    return transaction.run(project_root)


def ensure_compatibility(
    project_root: Optional[Path] = None,
    *,
    config: Optional[ConfigManager] = None,
) -> None:
    """Raise a ``CompatibilityError`` if vendored modules are unusable."""
    cfg = config or ConfigManager()
    checker = CompatibilityChecker(cfg.requirements(), cfg.tool_version(), cfg.vendor_settings())
    checker.check(project_root)


def init_project(
    project_root: Path,
    module_name: str = "",
    *,
    config: Optional[ConfigManager] = None,
) -> Path:
    """Create the ``cue.mod`` scaffold of ``project_root`` if missing."""
    cfg = config or ConfigManager()
    return init_module(project_root, module_name, cfg.vendor_settings())


__all__ = ["vendor", "ensure_compatibility", "init_project"]
