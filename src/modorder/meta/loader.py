"""Loading ``Meta`` records from TOML / YAML documents and mod directories.

A mod ships a ``meta.toml`` (or ``meta.yaml``) document such as::

    mod_id = "finn.savanna"
    name = "Savanna Pack"
    version = "1.2.0"
    authors = ["Finn"]

    [[dependencies]]
    mod_id = "finn.core"
    name = "Core"
    min_version = "1.0.0"
    ordering = "after"

    [[dependencies]]
    ztd_name = "grass.ztd"
    name = "Grass"
    optional = true

A malformed dependency entry is skipped with a logged warning so that one
bad declaration does not hide the whole mod; a malformed top-level record
raises ``MetaParseError``.

Usage
-----
::

    from modorder.meta.loader import MetaLoader

    loader = MetaLoader()
    found = loader.discover("mods/")
    for path, reason in found.errors:
        print(path, reason)
"""
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from modorder.errors import MetaParseError, VersionParseError
from modorder.meta.models import Dependency, IdentifierKind, Meta, Ordering, Version

logger = logging.getLogger(__name__)

META_FILENAMES: tuple[str, ...] = ("meta.toml", "meta.yaml", "meta.yml")
_SUFFIXES: tuple[str, ...] = (".toml", ".yaml", ".yml")
ARCHIVE_SUFFIX = ".ztd"

# Priority order when a dependency table names more than one identifier.
_IDENTIFIER_KEYS: tuple[IdentifierKind, ...] = (
    IdentifierKind.MOD_ID,
    IdentifierKind.ZTD_NAME,
    IdentifierKind.DLL_NAME,
)


@dataclass
class DiscoveryResult:
    """Everything found while scanning a mods directory.

    Attributes
    ----------
    mods:
        Mod id to metadata for every record that parsed.
    aliases:
        Archive name (``<stem>.ztd``) to mod id, used to resolve
        ``ztd_name`` dependencies.
    sources:
        Mod id to the metadata file it was read from.
    errors:
        ``(path, reason)`` for every record that was rejected.
    """

    mods: dict[str, Meta] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)
    sources: dict[str, Path] = field(default_factory=dict)
    errors: list[tuple[Path, str]] = field(default_factory=list)


class MetaLoader:
    """Builds ``Meta`` records from plain data, documents, files, or a directory."""

    # ------------------------------------------------------------------
    # Plain data
    # ------------------------------------------------------------------

    def from_dict(self, data: Any, path: Path | None = None) -> Meta:
        """Build a ``Meta`` from a decoded metadata document.

        Raises
        ------
        MetaParseError
            If a required key is missing or has the wrong type, or the
            top-level version is malformed.
        """
        if not isinstance(data, dict):
            raise MetaParseError(
                f"metadata must be a table/mapping, got {type(data).__name__}", path
            )

        missing = [key for key in ("mod_id", "name", "version") if key not in data]
        if missing:
            raise MetaParseError(f"missing required field(s): {', '.join(missing)}", path)

        mod_id = _require_str(data, "mod_id", path)
        name = _require_str(data, "name", path)
        try:
            version = Version.parse(_require_str(data, "version", path))
        except VersionParseError as exc:
            raise MetaParseError(str(exc), path) from exc

        authors = data.get("authors", [])
        if not isinstance(authors, list) or not all(isinstance(a, str) for a in authors):
            raise MetaParseError("'authors' must be a list of strings", path)

        link = data.get("link")
        if link is not None and not isinstance(link, str):
            raise MetaParseError("'link' must be a string", path)

        raw_deps = data.get("dependencies", [])
        if not isinstance(raw_deps, list):
            raise MetaParseError("'dependencies' must be an array of tables", path)

        dependencies: list[Dependency] = []
        for index, raw in enumerate(raw_deps):
            try:
                dependencies.append(self.dependency_from_dict(raw))
            except (MetaParseError, VersionParseError) as exc:
                logger.warning(
                    "Skipping invalid dependency at index %d of mod %r: %s. Value: %r",
                    index,
                    mod_id,
                    exc,
                    raw,
                )

        return Meta(
            mod_id=mod_id,
            name=name,
            description=str(data.get("description", "")),
            authors=tuple(authors),
            version=version,
            link=link,
            dependencies=tuple(dependencies),
        )

    def dependency_from_dict(self, raw: Any) -> Dependency:
        """Build one ``Dependency`` from a dependency table."""
        if not isinstance(raw, dict):
            raise MetaParseError(f"dependency must be a table, got {type(raw).__name__}")

        kind: IdentifierKind | None = None
        target = ""
        for candidate in _IDENTIFIER_KEYS:
            if candidate.value in raw:
                kind = candidate
                target = raw[candidate.value]
                break
        if kind is None:
            raise MetaParseError("missing field: one of mod_id, ztd_name, or dll_name")
        if not isinstance(target, str) or not target:
            raise MetaParseError(f"{kind.value!r} must be a non-empty string")

        name = raw.get("name", target)
        if not isinstance(name, str):
            raise MetaParseError("'name' must be a string")

        optional = raw.get("optional", False)
        if not isinstance(optional, bool):
            raise MetaParseError("'optional' must be a boolean")

        ordering_text = raw.get("ordering", Ordering.NONE.value)
        try:
            ordering = Ordering(str(ordering_text).lower())
        except ValueError as exc:
            raise MetaParseError(
                f"unknown ordering {ordering_text!r}; expected before, after, or none"
            ) from exc

        min_version = None
        if raw.get("min_version") is not None:
            min_version = Version.parse(str(raw["min_version"]))

        return Dependency(
            target=target,
            optional=optional,
            ordering=ordering,
            kind=kind,
            name=name,
            min_version=min_version,
        )

    # ------------------------------------------------------------------
    # Documents and files
    # ------------------------------------------------------------------

    def from_toml(self, text: str, path: Path | None = None) -> Meta:
        """Parse a TOML metadata document."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise MetaParseError(f"invalid TOML: {exc}", path) from exc
        return self.from_dict(data, path)

    def from_yaml(self, text: str, path: Path | None = None) -> Meta:
        """Parse a YAML metadata document."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise MetaParseError(f"invalid YAML: {exc}", path) from exc
        return self.from_dict(data, path)

    def load_file(self, path: str | Path) -> Meta:
        """Read and parse a metadata file, choosing the format by suffix."""
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise MetaParseError(f"cannot read file: {exc}", file_path) from exc

        suffix = file_path.suffix.lower()
        if suffix == ".toml":
            return self.from_toml(text, file_path)
        if suffix in (".yaml", ".yml"):
            return self.from_yaml(text, file_path)
        raise MetaParseError(f"unsupported metadata format {suffix!r}", file_path)

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def discover(self, mods_dir: str | Path) -> DiscoveryResult:
        """Load every mod found directly under ``mods_dir``.

        Each subdirectory holding a ``meta.toml``/``meta.yaml`` is one mod,
        and so is each top-level ``*.toml``/``*.yaml`` file.  Entries are
        visited in sorted path order; when two records share a mod id the
        first one wins and the later one is reported in ``errors``.

        Raises
        ------
        MetaParseError
            If ``mods_dir`` is not a directory.
        """
        root = Path(mods_dir)
        if not root.is_dir():
            raise MetaParseError("mods directory does not exist", root)

        result = DiscoveryResult()
        for entry in sorted(root.iterdir()):
            meta_file = _meta_file_for(entry)
            if meta_file is None:
                continue
            try:
                meta = self.load_file(meta_file)
            except MetaParseError as exc:
                logger.warning("Failed to load mod metadata from %s: %s", meta_file, exc.message)
                result.errors.append((meta_file, exc.message))
                continue

            if meta.mod_id in result.mods:
                reason = (
                    f"duplicate mod id {meta.mod_id!r}; already loaded from "
                    f"{result.sources[meta.mod_id]}"
                )
                logger.warning("Ignoring %s: %s", meta_file, reason)
                result.errors.append((meta_file, reason))
                continue

            result.mods[meta.mod_id] = meta
            result.sources[meta.mod_id] = meta_file
            result.aliases[entry.stem + ARCHIVE_SUFFIX] = meta.mod_id

        logger.info("Discovered %d mod(s) in %s", len(result.mods), root)
        return result


def _meta_file_for(entry: Path) -> Path | None:
    if entry.is_dir():
        for filename in META_FILENAMES:
            candidate = entry / filename
            if candidate.is_file():
                return candidate
        return None
    if entry.is_file() and entry.suffix.lower() in _SUFFIXES:
        return entry
    return None


def _require_str(data: dict[str, Any], key: str, path: Path | None) -> str:
    value = data[key]
    if not isinstance(value, str) or not value:
        raise MetaParseError(f"{key!r} must be a non-empty string", path)
    return value
