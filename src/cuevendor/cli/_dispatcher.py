"""
Auto-discovery CLI dispatcher for cuevendor.

Scans subfolders for commands and automatically registers them.
Adding new commands = just add a .py file to the appropriate subfolder.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any


def _load_command(module_name: str, default_summary: str) -> dict[str, Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        print(f"Warning: Could not import {module_name}: {e}", file=sys.stderr)
        return None
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", default_summary),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """
    Discover all CLI domain subfolders (project, ...).

    Returns:
        Dict mapping domain name to directory path
    """
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.name == "commands":
            continue
        if item.is_dir() and not item.name.startswith("_"):
            # Must have at least one non-init .py file
            has_commands = any(
                f.suffix == ".py" and not f.name.startswith("_")
                for f in item.iterdir()
            )
            if has_commands:
                domains[item.name] = item
    return domains


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands (no domain prefix)."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    if not commands_dir.exists():
        return commands

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        info = _load_command(f"cuevendor.cli.commands.{item.stem}", item.stem)
        if info is not None:
            commands[item.stem] = info
    return commands


@lru_cache(maxsize=8)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """
    Discover all commands in a domain subfolder.

    Args:
        domain: Name of the domain (e.g., "project")

    Returns:
        Dict mapping command name to command info dict
    """
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(domain_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        info = _load_command(f"cuevendor.cli.{domain}.{item.stem}", f"{domain} {item.stem}")
        if info is not None:
            commands[item.stem] = info
    return commands


def _register(subparsers: Any, name: str, info: dict[str, Any]) -> None:
    primary_name = name.replace("_", "-")
    aliases = [name] if primary_name != name else []
    cmd_parser = subparsers.add_parser(primary_name, aliases=aliases, help=info["summary"])
    if info["register_args"]:
        info["register_args"](cmd_parser)
    if info["main"]:
        cmd_parser.set_defaults(_func=info["main"])


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with auto-discovered domains and commands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="cuevendor",
        description="cuevendor - vendor bundled CUE modules into a project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for diagnostics on stderr (default: from configuration)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file instead of stderr",
    )

    subparsers = parser.add_subparsers(
        dest="domain",
        title="domains",
        description="Available command domains",
        metavar="<domain>",
    )

    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        _register(subparsers, cmd_name, cmd_info)

    for domain_name in sorted(discover_domains().keys()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue

        domain_parser = subparsers.add_parser(
            domain_name,
            help=f"{domain_name.title()} management commands",
        )
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain_name} commands",
            metavar="<command>",
        )
        for cmd_name, cmd_info in sorted(domain_commands.items()):
            _register(cmd_subparsers, cmd_name, cmd_info)

    return parser


def _get_version() -> str:
    """Get cuevendor version string."""
    from cuevendor import __version__

    return __version__


def _configure_logging(args: argparse.Namespace) -> None:
    from cuevendor.core.logging_setup import configure_logging

    level = args.log_level
    if level is None:
        from cuevendor.core.config import ConfigManager
        from cuevendor.core.exceptions import CueVendorError

        try:
            level = ConfigManager().log_level()
        except CueVendorError:
            # Broken configuration is reported by the command itself.
            level = "WARNING"
    log_path = Path(args.log_file) if args.log_file else None
    configure_logging(level, log_path=log_path)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for cuevendor CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    # If no domain specified, show help
    if not args.domain:
        parser.print_help()
        return 0

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
        if domain_parser:
            domain_parser.print_help()
        return 1

    _configure_logging(args)

    try:
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
