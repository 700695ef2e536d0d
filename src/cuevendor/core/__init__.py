"""Core library for cuevendor (config, vendoring, utilities)."""
