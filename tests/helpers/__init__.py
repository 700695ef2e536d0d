"""Test helper modules for the cuevendor test suite.

- bundles: Synthetic module bundles
- project: Builders and inspectors for project module caches
"""
