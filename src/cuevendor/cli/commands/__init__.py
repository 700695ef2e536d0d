"""Top-level cuevendor commands (no domain prefix)."""
