"""
cuevendor project update command.

SUMMARY: Vendor the bundled CUE modules into cue.mod/pkg
"""
from __future__ import annotations

import argparse

from cuevendor.cli import OutputFormatter, add_standard_flags, get_repo_root

SUMMARY = "Vendor the bundled CUE modules into cue.mod/pkg"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Vendor modules into the project."""
    from cuevendor.core.exceptions import CueVendorError
    from cuevendor.core.vendors.service import vendor

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        result = vendor(repo_root)

        if formatter.json_mode:
            formatter.json_output(result.to_dict())
            return 0

        formatter.text(f"Vendored modules into {result.project_root}:")
        for state in result.modules:
            if state.skipped:
                status = "skipped (symlink)"
            elif state.up_to_date:
                status = "up to date"
            else:
                status = "updated"
            formatter.text(f"  {state.module}: {status}")
        return 0

    except CueVendorError as e:
        formatter.error(e, error_code="project_update_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
