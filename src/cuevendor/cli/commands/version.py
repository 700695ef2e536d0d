"""
cuevendor version command.

SUMMARY: Show the cuevendor version and module requirements
"""
from __future__ import annotations

import argparse

from cuevendor.cli import OutputFormatter, add_json_flag

SUMMARY = "Show the cuevendor version and module requirements"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Print version information."""
    from cuevendor.core.config import ConfigManager
    from cuevendor.core.exceptions import CueVendorError

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        cfg = ConfigManager()
        version = cfg.tool_version()
        requirements = cfg.requirements()
        settings = cfg.vendor_settings()
    except CueVendorError as e:
        formatter.error(e, error_code="version_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "version": version,
                "development": settings.is_development(version),
                "requirements": [r.to_dict() for r in requirements],
            }
        )
        return 0

    formatter.text(f"{settings.tool_name} {version}")
    for requirement in requirements:
        formatter.text_kv(requirement.module, f">= {requirement.minimum}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
