"""
cuevendor project check command.

SUMMARY: Check vendored module versions against this release
"""
from __future__ import annotations

import argparse

from cuevendor.cli import OutputFormatter, add_standard_flags, get_repo_root

SUMMARY = "Check vendored module versions against this release"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Check module compatibility."""
    from cuevendor.core.exceptions import CueVendorError
    from cuevendor.core.vendors.service import ensure_compatibility

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        ensure_compatibility(repo_root)
        formatter.success(
            {"project_root": str(repo_root), "compatible": True},
            f"Vendored modules in {repo_root} are compatible",
        )
        return 0
    except CueVendorError as e:
        formatter.error(e, error_code="project_check_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
