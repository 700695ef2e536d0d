"""Project path discovery helpers."""
from __future__ import annotations

from .locator import MODULE_MARKER_DIR, locate_module_root

__all__ = ["MODULE_MARKER_DIR", "locate_module_root"]
