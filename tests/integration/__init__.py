"""Integration tests.

These tests write mod metadata and config files to a temporary
directory and drive discovery, resolution and validation end to end.
Run only the fast unit tests with ``pytest tests/unit/``.
"""
from __future__ import annotations
