"""
cuevendor - vendoring of bundled CUE modules

cuevendor copies the CUE modules it ships with into a project's
``cue.mod/pkg`` directory and checks that previously vendored modules are
compatible with the running tool before a plan is loaded.
"""

__version__ = "0.2.20"
DEVELOPMENT_VERSION = "devel"
__all__ = ["__version__", "DEVELOPMENT_VERSION"]
