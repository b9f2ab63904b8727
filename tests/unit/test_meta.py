"""Unit tests for modorder.meta.models and modorder.meta.loader."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from modorder.errors import MetaParseError, ModOrderError, VersionParseError
from modorder.meta.loader import MetaLoader
from modorder.meta.models import Dependency, IdentifierKind, Meta, Ordering, Version

_TOML = textwrap.dedent(
    """
    mod_id = "finn.savanna"
    name = "Savanna Pack"
    description = "Grasslands"
    version = "1.2.0"
    authors = ["Finn", "Ana"]
    link = "https://example.com/savanna"

    [[dependencies]]
    mod_id = "finn.core"
    name = "Core"
    min_version = "1.0.0"
    ordering = "after"

    [[dependencies]]
    ztd_name = "grass.ztd"
    name = "Grass"
    optional = true
    ordering = "before"

    [[dependencies]]
    dll_name = "langusa.dll"
    name = "Language DLL"
    """
)


# ===========================================================================
# Version
# ===========================================================================


class TestVersion:
    def test_parse(self) -> None:
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_str(self) -> None:
        assert str(Version(0, 10, 2)) == "0.10.2"

    def test_ordering(self) -> None:
        assert Version.parse("1.2.3") < Version.parse("1.10.0")
        assert Version.parse("2.0.0") > Version.parse("1.99.99")

    @pytest.mark.parametrize("text", ["1.0", "1.0.0.0", "a.b.c", "", "1.-1.0"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(VersionParseError):
            Version.parse(text)

    def test_error_is_value_error_and_mod_order_error(self) -> None:
        with pytest.raises(ValueError):
            Version.parse("x")
        with pytest.raises(ModOrderError):
            Version.parse("x")


# ===========================================================================
# Models
# ===========================================================================


class TestModels:
    def test_dependency_defaults(self) -> None:
        dep = Dependency("x")
        assert dep.optional is False
        assert dep.ordering is Ordering.NONE
        assert dep.kind is IdentifierKind.MOD_ID
        assert dep.min_version is None

    def test_is_ordering(self) -> None:
        assert Dependency("x", ordering=Ordering.AFTER).is_ordering
        assert not Dependency("x").is_ordering
        assert not Dependency("x.dll", ordering=Ordering.AFTER, kind=IdentifierKind.DLL_NAME).is_ordering

    def test_meta_is_frozen(self) -> None:
        meta = Meta(mod_id="a")
        with pytest.raises(AttributeError):
            meta.mod_id = "b"  # type: ignore[misc]

    def test_display_name_falls_back_to_id(self) -> None:
        assert Meta(mod_id="a").display_name == "a"
        assert Meta(mod_id="a", name="Alpha").display_name == "Alpha"

    def test_dependencies_on(self) -> None:
        meta = Meta(mod_id="a", dependencies=(Dependency("b"), Dependency("c"), Dependency("b", optional=True)))
        assert len(meta.dependencies_on("b")) == 2


# ===========================================================================
# MetaLoader
# ===========================================================================


class TestMetaLoader:
    def test_from_toml_full_record(self) -> None:
        meta = MetaLoader().from_toml(_TOML)
        assert meta.mod_id == "finn.savanna"
        assert meta.name == "Savanna Pack"
        assert meta.version == Version(1, 2, 0)
        assert meta.authors == ("Finn", "Ana")
        assert meta.link == "https://example.com/savanna"
        assert len(meta.dependencies) == 3

        core, grass, dll = meta.dependencies
        assert core == Dependency(
            target="finn.core",
            name="Core",
            ordering=Ordering.AFTER,
            min_version=Version(1, 0, 0),
        )
        assert grass.kind is IdentifierKind.ZTD_NAME
        assert grass.optional is True
        assert grass.ordering is Ordering.BEFORE
        assert dll.kind is IdentifierKind.DLL_NAME
        assert dll.ordering is Ordering.NONE

    def test_from_yaml(self) -> None:
        text = textwrap.dedent(
            """
            mod_id: finn.core
            name: Core
            version: "2.0.1"
            dependencies:
              - mod_id: finn.base
                ordering: after
            """
        )
        meta = MetaLoader().from_yaml(text)
        assert meta.version == Version(2, 0, 1)
        assert meta.dependencies == (Dependency("finn.base", name="finn.base", ordering=Ordering.AFTER),)

    def test_identifier_priority(self) -> None:
        dep = MetaLoader().dependency_from_dict({"ztd_name": "x.ztd", "mod_id": "x", "name": "X"})
        assert dep.kind is IdentifierKind.MOD_ID
        assert dep.target == "x"

    def test_ordering_is_case_insensitive(self) -> None:
        dep = MetaLoader().dependency_from_dict({"mod_id": "x", "ordering": "After"})
        assert dep.ordering is Ordering.AFTER

    def test_missing_required_fields(self) -> None:
        with pytest.raises(MetaParseError, match="mod_id"):
            MetaLoader().from_dict({"name": "x", "version": "1.0.0"})

    def test_bad_top_level_version(self) -> None:
        with pytest.raises(MetaParseError, match="Invalid version"):
            MetaLoader().from_dict({"mod_id": "a", "name": "A", "version": "1.0"})

    def test_non_mapping_document(self) -> None:
        with pytest.raises(MetaParseError):
            MetaLoader().from_yaml("- just\n- a list\n")

    def test_invalid_toml(self) -> None:
        with pytest.raises(MetaParseError, match="invalid TOML"):
            MetaLoader().from_toml("mod_id = ")

    def test_invalid_dependency_is_skipped(self, caplog) -> None:
        data = {
            "mod_id": "a",
            "name": "A",
            "version": "1.0.0",
            "dependencies": [
                {"name": "no identifier"},
                {"mod_id": "b", "ordering": "sideways"},
                {"mod_id": "c", "min_version": "one"},
                {"mod_id": "d", "ordering": "after"},
            ],
        }
        with caplog.at_level("WARNING", logger="modorder.meta.loader"):
            meta = MetaLoader().from_dict(data)
        assert [d.target for d in meta.dependencies] == ["d"]
        assert caplog.text.count("Skipping invalid dependency") == 3

    def test_dependencies_must_be_a_list(self) -> None:
        with pytest.raises(MetaParseError):
            MetaLoader().from_dict({"mod_id": "a", "name": "A", "version": "1.0.0", "dependencies": {}})

    def test_load_file_dispatches_on_suffix(self, tmp_path: Path) -> None:
        toml_path = tmp_path / "meta.toml"
        toml_path.write_text(_TOML, encoding="utf-8")
        assert MetaLoader().load_file(toml_path).mod_id == "finn.savanna"

        yaml_path = tmp_path / "meta.yml"
        yaml_path.write_text("mod_id: y\nname: Y\nversion: '1.0.0'\n", encoding="utf-8")
        assert MetaLoader().load_file(yaml_path).mod_id == "y"

    def test_load_file_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "meta.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(MetaParseError, match="unsupported"):
            MetaLoader().load_file(path)

    def test_load_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(MetaParseError) as excinfo:
            MetaLoader().load_file(tmp_path / "nope.toml")
        assert excinfo.value.path == tmp_path / "nope.toml"


# ===========================================================================
# Discovery
# ===========================================================================


class TestDiscover:
    def test_directories_and_loose_files(self, write_mod, mods_dir: Path) -> None:
        write_mod("core_pack", "finn.core")
        (mods_dir / "extra.yaml").write_text(
            "mod_id: finn.extra\nname: Extra\nversion: '0.1.0'\n", encoding="utf-8"
        )
        (mods_dir / "README.txt").write_text("not a mod", encoding="utf-8")
        (mods_dir / "empty_dir").mkdir()

        found = MetaLoader().discover(mods_dir)
        assert sorted(found.mods) == ["finn.core", "finn.extra"]
        assert found.aliases == {"core_pack.ztd": "finn.core", "extra.ztd": "finn.extra"}
        assert found.sources["finn.core"] == mods_dir / "core_pack" / "meta.toml"
        assert found.errors == []

    def test_broken_record_is_reported(self, write_mod, mods_dir: Path) -> None:
        write_mod("good", "good")
        broken = mods_dir / "broken"
        broken.mkdir()
        (broken / "meta.toml").write_text('mod_id = "broken"\n', encoding="utf-8")

        found = MetaLoader().discover(mods_dir)
        assert list(found.mods) == ["good"]
        assert len(found.errors) == 1
        assert found.errors[0][0] == broken / "meta.toml"

    def test_duplicate_mod_id_first_wins(self, write_mod, mods_dir: Path) -> None:
        write_mod("a_first", "same")
        write_mod("b_second", "same", version="2.0.0")

        found = MetaLoader().discover(mods_dir)
        assert found.mods["same"].version == Version(1, 0, 0)
        assert "duplicate mod id" in found.errors[0][1]

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(MetaParseError):
            MetaLoader().discover(tmp_path / "nowhere")
