"""cuevendor project CLI commands.

Provides CLI interface for the project's module cache:
- init: Create the cue.mod scaffold
- update: Vendor the bundled modules into cue.mod/pkg
- check: Verify vendored module versions
"""
