"""Vendor subsystem exceptions.

Two families live here:

- ``VendorError`` subclasses are raised by the vendoring transaction and
  mean the project's module cache could not be (fully) updated.
- ``CompatibilityError`` subclasses are raised by the compatibility check
  and never imply that anything on disk was modified.

Messages are treated as stable text: they always name the offending module,
the versions involved and the command that resolves the problem.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from cuevendor.core.exceptions import CueVendorError


class VendorError(CueVendorError):
    """Base exception for vendor subsystem errors."""


class VendorLockError(VendorError):
    """Raised when another vendoring run holds the project lock."""


class ScaffoldError(VendorError):
    """Raised when the project's cue.mod scaffold cannot be created."""


class ExtractError(VendorError):
    """Raised when the module bundle cannot be read or staged."""


class SwapError(VendorError):
    """Raised when a staged module cannot be renamed into place.

    Modules swapped before the failure stay swapped; ``states`` records how
    far each module got so callers can report the partial result.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: str = "",
        states: Sequence[Any] = (),
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.setdefault("module", module)
        super().__init__(message, context=ctx)
        self.module = module
        self.states = tuple(states)


class VendorCancelledError(VendorError):
    """Raised when a run is cancelled between two module swaps."""

    def __init__(
        self,
        message: str = "",
        *,
        states: Sequence[Any] = (),
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.states = tuple(states)


class VersionStoreError(CueVendorError):
    """Raised when a version marker exists but cannot be read or written."""


class CompatibilityError(CueVendorError):
    """Base exception for vendored-module compatibility failures."""

    def __init__(self, message: str = "", *, module: str = "", context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx.setdefault("module", module)
        super().__init__(message, context=ctx)
        self.module = module


class MissingVersionMarkerError(CompatibilityError):
    """Raised when a vendored module carries no version marker."""


class MalformedVersionError(CompatibilityError):
    """Raised when a version marker (or the tool version) cannot be parsed."""


class IncompatibleModuleError(CompatibilityError):
    """Raised when a vendored module is older than the required minimum."""


class NeedsUpgradeError(CompatibilityError):
    """Raised when a vendored module is newer than the running tool."""


__all__ = [
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
