"""Mod metadata models and loaders."""
from __future__ import annotations

from modorder.meta.loader import DiscoveryResult, MetaLoader
from modorder.meta.models import Dependency, IdentifierKind, Meta, Ordering, Version

__all__ = [
    "Dependency",
    "DiscoveryResult",
    "IdentifierKind",
    "Meta",
    "MetaLoader",
    "Ordering",
    "Version",
]
