import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'cuevendor'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from cuevendor.core.logging_setup import reset_logging_for_tests
from cuevendor.core.utils.semver import SemVer
from cuevendor.core.vendors.models import ModuleRequirement, RequirementTable, VendorSettings
from cuevendor.data import clear_caches
from helpers.bundles import sample_bundle_files


@pytest.fixture(autouse=True)
def _isolate_cuevendor_env(monkeypatch):
    """Drop developer CUEVENDOR_* overrides so config loads are deterministic."""
    for key in list(os.environ):
        if key.startswith("CUEVENDOR_"):
            monkeypatch.delenv(key, raising=False)
    clear_caches()
    yield
    clear_caches()
    reset_logging_for_tests()


@pytest.fixture
def settings() -> VendorSettings:
    return VendorSettings()


@pytest.fixture
def requirements() -> RequirementTable:
    return RequirementTable(
        [
            ModuleRequirement("dagger.io", SemVer.parse("0.2.11")),
            ModuleRequirement("universe.dagger.io", SemVer.parse("0.2.9")),
        ]
    )


@pytest.fixture
def sample_bundle():
    from cuevendor.core.vendors.bundle import InMemoryBundle

    files, executables = sample_bundle_files()
    return InMemoryBundle(files, executables=executables)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory (no cue.mod yet)."""
    root = tmp_path / "project"
    root.mkdir()
    return root
