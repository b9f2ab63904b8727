"""End-to-end: discover mods on disk, resolve an order, then validate it."""
from __future__ import annotations

from pathlib import Path

import modorder
from modorder.config import load_config
from modorder.resolver.diagnostics import WarningKind


def _dep(key: str, target: str, ordering: str = "after", optional: bool = False) -> str:
    flag = "true" if optional else "false"
    return (
        f'\n[[dependencies]]\n{key} = "{target}"\nname = "{target}"\n'
        f'ordering = "{ordering}"\noptional = {flag}\n'
    )


def test_fresh_install_resolves_and_validates(write_mod, mods_dir: Path) -> None:
    write_mod("core_pack", "finn.core")
    write_mod("savanna", "finn.savanna", _dep("ztd_name", "core_pack.ztd"))
    write_mod("savanna_ui", "finn.ui", _dep("mod_id", "finn.savanna") + _dep("mod_id", "finn.core"))
    write_mod("lang", "finn.lang", _dep("dll_name", "lang.dll"))

    found = modorder.discover(mods_dir)
    result = modorder.resolve_order(found.mods, aliases=found.aliases)

    assert result.warnings == []
    assert sorted(result.order) == sorted(found.mods)
    order = result.order
    assert order.index("finn.core") < order.index("finn.savanna") < order.index("finn.ui")

    report = modorder.validate(order, found.mods)
    assert report.is_valid
    assert report.diagnostics == []


def test_upgrade_with_config(write_mod, mods_dir: Path, tmp_path: Path) -> None:
    write_mod("core", "core")
    write_mod("legacy", "legacy")
    write_mod("off", "off")
    write_mod("patch", "patch", _dep("mod_id", "legacy", ordering="before"))
    write_mod("addon", "addon", _dep("mod_id", "core") + _dep("mod_id", "extras", optional=True))

    config_path = tmp_path / "openzt.toml"
    config_path.write_text(
        '[mod_loading]\norder = ["core", "legacy", "uninstalled"]\ndisabled = ["off"]\n',
        encoding="utf-8",
    )
    config = load_config(config_path)
    found = modorder.discover(mods_dir)

    result = modorder.resolve_order(
        found.mods,
        existing_order=config.mod_loading.order,
        disabled_mods=config.mod_loading.disabled,
        aliases=found.aliases,
    )

    assert "uninstalled" not in result.order
    assert "off" not in result.order
    assert result.order.index("core") < result.order.index("legacy")
    assert result.order.index("patch") < result.order.index("legacy")
    assert result.order.index("core") < result.order.index("addon")
    assert [w.kind for w in result.warnings] == [WarningKind.MISSING_OPTIONAL_DEPENDENCY]

    rerun = modorder.resolve_order(
        found.mods,
        existing_order=result.order,
        disabled_mods=config.mod_loading.disabled,
        aliases=found.aliases,
    )
    assert rerun.order == result.order
    assert rerun.warnings == []

    report = modorder.validate(result.order, found.mods)
    assert report.is_valid
    assert [d.code for d in report.diagnostics] == ["MOD002"]
