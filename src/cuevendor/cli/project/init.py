"""
cuevendor project init command.

SUMMARY: Create the cue.mod scaffold of a project
"""
from __future__ import annotations

import argparse
from pathlib import Path

from cuevendor.cli import OutputFormatter, add_json_flag

SUMMARY = "Create the cue.mod scaffold of a project"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "module",
        nargs="?",
        default="",
        help="Module name written to cue.mod/module.cue (only when the file is new)",
    )
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Project directory to initialize (default: current directory)",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Initialize the project scaffold."""
    from cuevendor.core.exceptions import CueVendorError
    from cuevendor.core.vendors.service import init_project

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd()
        mod_dir = init_project(root, args.module)
        formatter.success(
            {"project_root": str(root), "module_dir": str(mod_dir)},
            f"Initialized {mod_dir}",
        )
        return 0
    except CueVendorError as e:
        formatter.error(e, error_code="project_init_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
