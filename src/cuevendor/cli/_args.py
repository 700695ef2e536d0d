"""Common CLI argument registration utilities.

This module provides reusable argument registration functions to reduce
duplication across CLI commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for project root override.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path (default: nearest directory with cue.mod)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that most commands use.

    Adds: --json, --repo-root
    """
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
]
