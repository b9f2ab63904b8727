"""mod-order — load-order resolution for user-authored mods.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import modorder

    found = modorder.discover("mods/")
    result = modorder.resolve_order(
        found.mods,
        existing_order=["finn.core"],
        disabled_mods=["old.mod"],
        aliases=found.aliases,
    )
    for warning in result.warnings:
        print(warning)

    report = modorder.validate(result.order, found.mods)

    modorder.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from modorder.meta.loader import DiscoveryResult
    from modorder.meta.models import Meta
    from modorder.resolver.diagnostics import ResolutionResult
    from modorder.validator.validator import ValidationResult


def resolve_order(
    mods: Mapping[str, "Meta"],
    existing_order: Sequence[str] = (),
    disabled_mods: Iterable[str] = (),
    aliases: Mapping[str, str] | None = None,
) -> "ResolutionResult":
    """Compute the load order for ``mods``.

    Parameters
    ----------
    mods:
        Mod id to metadata for every installed mod.
    existing_order:
        The previously persisted order; its relative order is kept.
    disabled_mods:
        Mods that must not be activated.
    aliases:
        Archive name to mod id, for ``ztd_name`` dependencies.

    Returns
    -------
    ResolutionResult
        The new order plus any warnings.  Never raises for dependency
        problems.
    """
    from modorder.resolver.resolver import resolve_order as _resolve_order

    return _resolve_order(mods, existing_order, disabled_mods, aliases)


def validate(
    order: Sequence[str], mods: Mapping[str, "Meta"], strict: bool = False
) -> "ValidationResult":
    """Check ``order`` against the declared constraints of ``mods``.

    Parameters
    ----------
    order:
        The load order to check.  It is not modified.
    mods:
        Mod id to metadata for every installed mod.
    strict:
        When ``True``, warnings are promoted to errors.
    """
    from modorder.validator.validator import validate_load_order

    return validate_load_order(order, mods, strict=strict)


def discover(mods_dir: str | Path) -> "DiscoveryResult":
    """Load the metadata of every mod found under ``mods_dir``.

    Raises
    ------
    modorder.errors.MetaParseError
        If ``mods_dir`` is not a directory.
    """
    from modorder.meta.loader import MetaLoader

    return MetaLoader().discover(mods_dir)


__all__ = [
    "__version__",
    "resolve_order",
    "validate",
    "discover",
]
