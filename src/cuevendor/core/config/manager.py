"""
cuevendor configuration management (YAML defaults + environment overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import yaml
from jsonschema import Draft202012Validator

from cuevendor import __version__
from cuevendor.core.exceptions import ConfigError
from cuevendor.core.vendors.models import RequirementTable, VendorSettings
from cuevendor.data import get_data_path, read_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "CUEVENDOR_"
# Sections that only the bundled defaults may set.
LOCKED_SECTIONS = frozenset({"requirements"})


class ConfigManager:
    """Load and validate cuevendor configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: CUEVENDOR_<section>__<key>
    2. Bundled defaults: cuevendor.data/config/defaults.yaml

    The requirement table is part of the bundled defaults; overriding it from
    the environment raises ``ConfigError``.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ
        self._config: Optional[Dict[str, Any]] = None

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "yes", "on", "1"}:
            return True
        if low in {"false", "no", "off", "0"}:
            return False
        return None

    def _as_int(self, v: str) -> Optional[int]:
        try:
            return int(v)
        except ValueError:
            return None

    def _as_json(self, v: str) -> Any:
        s = v.strip()
        if not s or s[0] not in "[{":
            return None
        try:
            return json.loads(s)
        except json.JSONDecodeError:
            return None

    def _coerce_type(self, value: str) -> Any:
        # Version strings like "0.2" must stay strings, so floats are not coerced.
        for caster in (self._as_json, self._as_bool, self._as_int):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any, str]]:
        for key in sorted(self._environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            segs = raw.split("__")
            if not raw or any(seg == "" for seg in segs):
                raise ConfigError(
                    f"Malformed {ENV_PREFIX}* key: empty segment in '{key}'.",
                    context={"key": key},
                )
            path = [seg.lower() for seg in segs]
            if path[0] in LOCKED_SECTIONS:
                raise ConfigError(
                    f"{key}: the '{path[0]}' section is built into this release and cannot be overridden.",
                    context={"key": key},
                )
            yield path, self._coerce_type(self._environ[key]), key

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any, key: str) -> None:
        cur: Any = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if nxt is None:
                nxt = {}
                cur[part] = nxt
            if not isinstance(nxt, dict):
                raise ConfigError(
                    f"Cannot apply {key}: '{part}' is not a section.",
                    context={"key": key},
                )
            cur = nxt
        cur[path[-1]] = value

    def _validate(self, config: Dict[str, Any]) -> None:
        schema = yaml.safe_load(get_data_path("schemas", "config.schema.yaml").read_text(encoding="utf-8"))
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
        if errors:
            first = errors[0]
            location = ".".join(str(p) for p in first.path) or "<root>"
            raise ConfigError(
                f"Invalid configuration at {location}: {first.message}",
                context={"path": location, "errors": len(errors)},
            )

    def load_config(self) -> Dict[str, Any]:
        """Return the merged, validated configuration (cached per instance)."""
        if self._config is not None:
            return self._config

        config = copy.deepcopy(read_yaml("config", "defaults.yaml"))
        for path, value, key in self._iter_env_overrides():
            logger.debug("config override %s=%r", key, value)
            self._set_nested(config, path, value, key)

        self._validate(config)
        self._config = config
        return config

    def tool_version(self) -> str:
        """Version of the running tool, or the development pseudo-version."""
        tool = self.load_config()["tool"]
        version = tool.get("version")
        return str(version) if version else __version__

    def vendor_settings(self) -> VendorSettings:
        cfg = self.load_config()
        vendoring = cfg["vendoring"]
        remediation = cfg["remediation"]
        return VendorSettings(
            tool_name=cfg["tool"]["name"],
            development_version=cfg["tool"]["development_version"],
            module_dir=vendoring["module_dir"],
            module_file=vendoring["module_file"],
            pkg_dir=vendoring["pkg_dir"],
            lock_file=vendoring["lock_file"],
            version_file=vendoring["version_file"],
            staging_prefix=vendoring["staging_prefix"],
            backup_suffix=vendoring["backup_suffix"],
            bundle_exclude=tuple(vendoring["bundle_exclude"]),
            generated_header=vendoring["generated_header"],
            legacy_generated_headers=tuple(vendoring["legacy_generated_headers"]),
            update_command=remediation["update"],
            upgrade_command=remediation["upgrade"],
        )

    def requirements(self) -> RequirementTable:
        try:
            return RequirementTable.from_config(self.load_config()["requirements"])
        except ValueError as exc:
            raise ConfigError(f"Invalid requirement table: {exc}") from exc

    def log_level(self) -> Union[str, int]:
        return self.load_config().get("logging", {}).get("level", "WARNING")


__all__ = ["ConfigManager", "ENV_PREFIX"]
