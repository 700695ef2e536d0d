"""Shared utilities for cuevendor core modules."""
