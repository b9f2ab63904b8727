"""CLI entry point for mod-order.

Invoked as::

    mod-order [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m modorder.cli.main

Commands
--------
resolve     Compute the load order for a mods directory
validate    Check a load order against declared dependencies
list        List discovered mods and their dependencies
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from modorder.config import LogLevel, ModOrderConfig
    from modorder.meta.loader import DiscoveryResult

console = Console()
err_console = Console(stderr=True)

_LOG_LEVELS = ["trace", "debug", "info", "warn", "error"]


def _configure_logging(level: "LogLevel") -> None:
    """Route ``modorder`` log records to stderr through Rich."""
    package_logger = logging.getLogger("modorder")
    package_logger.setLevel(level.to_logging_level())
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=err_console, show_path=False, show_time=False)
        )


def _load_config_or_exit(path: str | None) -> "ModOrderConfig":
    """Load the host configuration, exiting on error."""
    from modorder.config import load_config
    from modorder.errors import ConfigError

    try:
        return load_config(path)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)


def _discover_or_exit(mods_dir: str) -> "DiscoveryResult":
    """Discover mods, printing rejected records and exiting if the directory is unusable."""
    from modorder.errors import MetaParseError
    from modorder.meta.loader import MetaLoader

    try:
        found = MetaLoader().discover(mods_dir)
    except MetaParseError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    for path, reason in found.errors:
        err_console.print(f"[yellow]Skipped[/yellow] {path}: {reason}")
    return found


def _prepare(ctx: click.Context, config_path: str | None) -> "ModOrderConfig":
    from modorder.config import LogLevel

    config = _load_config_or_exit(config_path)
    override = ctx.obj.get("log_level") if ctx.obj else None
    _configure_logging(LogLevel(override) if override else config.logging.level)
    return config


def _severity_color(severity_name: str) -> str:
    """Map a severity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "blue",
        "HINT": "dim",
    }
    return colors.get(severity_name, "white")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="mod-order")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override the [logging] level from the config file.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Resolve and validate the load order of user-authored mods."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.lower() if log_level else None


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from modorder import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]mod-order[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# list command
# ---------------------------------------------------------------------------


@cli.command(name="list")
@click.argument("mods_dir", type=click.Path(exists=False))
@click.pass_context
def list_command(ctx: click.Context, mods_dir: str) -> None:
    """List the mods found in MODS_DIR and their dependencies."""
    _prepare(ctx, None)
    found = _discover_or_exit(mods_dir)

    if not found.mods:
        console.print(f"[yellow]No mods found[/yellow] in {mods_dir}")
        return

    table = Table(title=f"Mods: {mods_dir}", show_lines=True)
    table.add_column("Mod ID", style="bold")
    table.add_column("Name")
    table.add_column("Version")
    table.add_column("Dependencies")

    for mod_id in sorted(found.mods):
        meta = found.mods[mod_id]
        deps = "\n".join(
            f"{d.target} ({d.kind.value}, {d.ordering.value}"
            + (", optional" if d.optional else "")
            + ")"
            for d in meta.dependencies
        )
        table.add_row(mod_id, meta.display_name, str(meta.version), deps or "[dim]none[/dim]")

    console.print(table)
    console.print(f"\n[bold]{len(found.mods)}[/bold] mod(s) found")


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


@cli.command(name="resolve")
@click.argument("mods_dir", type=click.Path(exists=False))
@click.option("--config", "config_path", default=None, help="Host configuration file (TOML)")
@click.option("--order", "order_ids", multiple=True, help="Existing order; replaces the config order")
@click.option("--disabled", "disabled_ids", multiple=True, help="Additional disabled mod id")
@click.option("--output", "-o", default=None, help="Write the result to this file")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output file format",
)
@click.option("--strict", is_flag=True, default=False, help="Exit with status 1 on any warning")
@click.pass_context
def resolve_command(
    ctx: click.Context,
    mods_dir: str,
    config_path: str | None,
    order_ids: tuple[str, ...],
    disabled_ids: tuple[str, ...],
    output: str | None,
    output_format: str,
    strict: bool,
) -> None:
    """Compute the load order for the mods in MODS_DIR."""
    from modorder.resolver import DependencyResolver, ResolutionResult
    from modorder.serializer import ResultSerializer

    config = _prepare(ctx, config_path)
    found = _discover_or_exit(mods_dir)
    loading = config.mod_loading

    existing = list(order_ids) if order_ids else list(loading.order)
    disabled = set(loading.disabled) | set(disabled_ids)

    resolver = DependencyResolver(found.mods, found.aliases)
    new_mods = resolver.new_mods(existing, disabled)

    if loading.auto_resolve_new_mods:
        result = resolver.resolve_order(existing, disabled)
    else:
        result = ResolutionResult(order=[m for m in existing if m in found.mods], warnings=[])
        if new_mods:
            console.print(
                "[yellow]auto_resolve_new_mods is off;[/yellow] not inserting: "
                + ", ".join(new_mods)
            )

    table = Table(title=f"Load order: {mods_dir}")
    table.add_column("#", justify="right")
    table.add_column("Mod ID", style="bold")
    table.add_column("Version")
    table.add_column("Status")
    for index, mod_id in enumerate(result.order):
        meta = found.mods[mod_id]
        if mod_id in disabled:
            status = "[dim]disabled[/dim]"
        elif mod_id in new_mods:
            status = "[green]new[/green]"
        else:
            status = ""
        table.add_row(str(index), mod_id, str(meta.version), status)
    console.print(table)

    if result.warnings and loading.warn_on_conflicts:
        warn_table = Table(title="Resolution warnings", show_lines=True)
        warn_table.add_column("Severity", style="bold", min_width=10)
        warn_table.add_column("Kind")
        warn_table.add_column("Message")
        for warning in result.warnings:
            color = _severity_color(warning.severity.name)
            warn_table.add_row(
                f"[{color}]{warning.severity.name}[/{color}]",
                warning.kind.name.lower(),
                str(warning),
            )
        console.print(warn_table)

    console.print(
        f"\n[bold]Summary:[/bold] {len(result.order)} mod(s), "
        f"{len(new_mods)} new, {len(result.warnings)} warning(s)"
    )

    if output:
        serializer = ResultSerializer()
        text = serializer.to_json(result) if output_format == "json" else serializer.to_yaml(result)
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Result written to[/green] {output}")

    if strict and result.warnings:
        sys.exit(1)


# ---------------------------------------------------------------------------
# validate command
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@click.argument("mods_dir", type=click.Path(exists=False))
@click.option("--config", "config_path", default=None, help="Host configuration file (TOML)")
@click.option("--order", "order_ids", multiple=True, help="Order to check; replaces the config order")
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors")
@click.pass_context
def validate_command(
    ctx: click.Context,
    mods_dir: str,
    config_path: str | None,
    order_ids: tuple[str, ...],
    strict: bool,
) -> None:
    """Check a load order against the dependencies declared in MODS_DIR."""
    from modorder.validator import Validator

    config = _prepare(ctx, config_path)
    found = _discover_or_exit(mods_dir)
    order = list(order_ids) if order_ids else list(config.mod_loading.order)

    result = Validator(strict=strict).validate(order, found.mods)

    if not result.diagnostics:
        console.print(f"[green]OK[/green] load order of {len(order)} mod(s) — no issues found")
        sys.exit(0)

    table = Table(title="Load order validation", show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Code", min_width=8)
    table.add_column("Position", min_width=8)
    table.add_column("Message")

    for d in result.diagnostics:
        color = _severity_color(d.severity.name)
        table.add_row(
            f"[{color}]{d.severity.name}[/{color}]",
            d.code,
            str(d.position) if d.position >= 0 else "-",
            d.message + (f"\n[dim]hint: {d.suggestion}[/dim]" if d.suggestion else ""),
        )

    console.print(table)
    console.print(
        f"\n[bold]Summary:[/bold] {len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    )

    if not result.is_valid:
        sys.exit(1)


if __name__ == "__main__":
    cli()
