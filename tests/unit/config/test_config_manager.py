from __future__ import annotations

import copy

import pytest

from cuevendor import __version__
from cuevendor.core.config import ConfigManager
from cuevendor.core.exceptions import ConfigError
from cuevendor.core.utils.semver import SemVer


class TestBundledDefaults:
    def test_defaults_validate(self) -> None:
        cfg = ConfigManager(environ={}).load_config()
        assert cfg["tool"]["name"] == "cuevendor"
        assert cfg["vendoring"]["lock_file"] == "dagger.lock"

    def test_tool_version_falls_back_to_package_version(self) -> None:
        assert ConfigManager(environ={}).tool_version() == __version__

    def test_requirement_table_order_and_minimums(self) -> None:
        table = ConfigManager(environ={}).requirements()
        assert table.modules == ("dagger.io", "universe.dagger.io")
        assert table.get("dagger.io").minimum == SemVer.parse("0.2.11")
        assert table.get("universe.dagger.io").minimum == SemVer.parse("0.2.9")

    def test_vendor_settings_mirror_config(self) -> None:
        settings = ConfigManager(environ={}).vendor_settings()
        assert settings.module_dir == "cue.mod"
        assert settings.pkg_dir == "pkg"
        assert settings.version_file == "cue.mod/version.txt"
        assert settings.bundle_exclude == ("cue.mod/pkg",)
        assert settings.update_command == "cuevendor project update"

    def test_log_level_default(self) -> None:
        assert ConfigManager(environ={}).log_level() == "WARNING"


class TestEnvironmentOverrides:
    def test_development_version_override(self) -> None:
        mgr = ConfigManager(environ={"CUEVENDOR_TOOL__VERSION": "devel"})
        assert mgr.tool_version() == "devel"
        assert mgr.vendor_settings().is_development(mgr.tool_version())

    def test_version_like_values_stay_strings(self) -> None:
        mgr = ConfigManager(environ={"CUEVENDOR_tool__version": "0.3"})
        assert mgr.tool_version() == "0.3"

    def test_json_list_override(self) -> None:
        mgr = ConfigManager(environ={"CUEVENDOR_vendoring__bundle_exclude": '["cue.mod/pkg", "testdata"]'})
        assert mgr.vendor_settings().bundle_exclude == ("cue.mod/pkg", "testdata")

    def test_reads_process_environment_by_default(self, monkeypatch) -> None:
        monkeypatch.setenv("CUEVENDOR_logging__level", "DEBUG")
        assert ConfigManager().log_level() == "DEBUG"

    def test_unrelated_variables_ignored(self) -> None:
        mgr = ConfigManager(environ={"OTHER_tool__version": "devel"})
        assert mgr.tool_version() == __version__

    def test_empty_segment_rejected(self) -> None:
        with pytest.raises(ConfigError) as exc:
            ConfigManager(environ={"CUEVENDOR_tool____version": "1"}).load_config()
        assert "empty segment" in str(exc.value)

    def test_scalar_cannot_become_section(self) -> None:
        with pytest.raises(ConfigError):
            ConfigManager(environ={"CUEVENDOR_tool__name__x": "y"}).load_config()

    def test_schema_violation_names_location(self) -> None:
        with pytest.raises(ConfigError) as exc:
            ConfigManager(environ={"CUEVENDOR_vendoring__lock_file": ""}).load_config()
        assert "vendoring.lock_file" in str(exc.value)
        assert exc.value.context["path"] == "vendoring.lock_file"

    def test_requirements_cannot_be_overridden(self) -> None:
        table = '[{"module": "dagger.io", "minimum": "0.0.1"}]'
        with pytest.raises(ConfigError) as exc:
            ConfigManager(environ={"CUEVENDOR_requirements": table}).load_config()
        assert exc.value.context["key"] == "CUEVENDOR_requirements"

    def test_nested_requirement_override_rejected(self) -> None:
        with pytest.raises(ConfigError):
            ConfigManager(environ={"CUEVENDOR_REQUIREMENTS__0": "{}"}).requirements()

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ConfigManager(environ={"CUEVENDOR_tool____version": "1"}).load_config()


class TestBundledRequirementTable:
    """Broken requirement tables in the bundled defaults are reported as ConfigError."""

    @pytest.fixture
    def defaults(self, monkeypatch):
        from cuevendor.core.config import manager
        from cuevendor.data import read_yaml

        data = copy.deepcopy(read_yaml("config", "defaults.yaml"))
        monkeypatch.setattr(manager, "read_yaml", lambda *_args: data)
        return data

    def test_empty_table_rejected(self, defaults) -> None:
        defaults["requirements"] = []
        with pytest.raises(ConfigError):
            ConfigManager(environ={}).load_config()

    def test_duplicate_module_rejected(self, defaults) -> None:
        defaults["requirements"] = [
            {"module": "dagger.io", "minimum": "0.1.0"},
            {"module": "dagger.io", "minimum": "0.2.0"},
        ]
        with pytest.raises(ConfigError) as exc:
            ConfigManager(environ={}).requirements()
        assert "dagger.io" in str(exc.value)

    def test_malformed_minimum_rejected(self, defaults) -> None:
        defaults["requirements"] = [{"module": "dagger.io", "minimum": "latest"}]
        with pytest.raises(ConfigError):
            ConfigManager(environ={}).requirements()
