"""Shared test fixtures for mod-order.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "modorder"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def write_mod(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes ``<tmp>/mods/<dirname>/meta.toml``.

    ``body`` is appended after the required header fields, so tests only
    spell out the dependency tables they care about.
    """
    mods_dir = tmp_path / "mods"
    mods_dir.mkdir(exist_ok=True)

    def _write(dirname: str, mod_id: str, body: str = "", version: str = "1.0.0") -> Path:
        mod_dir = mods_dir / dirname
        mod_dir.mkdir(exist_ok=True)
        header = f'mod_id = "{mod_id}"\nname = "{dirname}"\nversion = "{version}"\n'
        path = mod_dir / "meta.toml"
        path.write_text(header + textwrap.dedent(body), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def mods_dir(tmp_path: Path) -> Path:
    """The directory ``write_mod`` writes into."""
    path = tmp_path / "mods"
    path.mkdir(exist_ok=True)
    return path
