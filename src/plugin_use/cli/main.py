"""CLI entry point for plugin-use.

Invoked as::

    plugin-use [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m plugin_use.cli.main

Commands
--------
- ``version``  Show the installed version.
- ``plugins``  List plugins advertised under an entry-point group.
- ``apply``    Apply a YAML plugin manifest to a fresh host and report it.
"""
from __future__ import annotations

import importlib.metadata
import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from plugin_use.discovery import DEFAULT_ENTRYPOINT_GROUP

console = Console()


@click.group()
@click.version_option(package_name="plugin-use")
def cli() -> None:
    """Apply and replay plugin functions on pluggable hosts"""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from plugin_use import __version__

    console.print(f"[bold]plugin-use[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# plugins
# ---------------------------------------------------------------------------


@cli.command(name="plugins")
@click.option(
    "--group",
    "-g",
    default=DEFAULT_ENTRYPOINT_GROUP,
    show_default=True,
    help="Entry-point group to list.",
)
def plugins_command(group: str) -> None:
    """List plugins registered under an entry-point group."""
    entry_points = list(importlib.metadata.entry_points(group=group))

    console.print(f"[bold]Registered plugins[/bold] ({group}):")
    if not entry_points:
        console.print("  (No plugins registered. Install a plugin package to see entries here.)")
        return

    table = Table(show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Target", style="yellow")
    for entry_point in entry_points:
        table.add_row(entry_point.name, entry_point.value)
    console.print(table)


# ---------------------------------------------------------------------------
# apply
# ---------------------------------------------------------------------------


@cli.command(name="apply")
@click.argument(
    "manifest_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
def apply_command(manifest_path: Path, json_output: bool) -> None:
    """Apply a plugin manifest to a fresh host.

    Exceptions raised by the plugins themselves are not caught.

    Examples:

    \b
        plugin-use apply plugins.yaml
        plugin-use apply plugins.yaml --json-output
    """
    from plugin_use.errors import PluginResolutionError
    from plugin_use.manifest import PluginManifest, apply_manifest
    from plugin_use.mixin import Pluggable

    try:
        manifest = PluginManifest.from_yaml(manifest_path)
    except ValueError as exc:
        console.print(f"[red]Manifest error:[/red] {exc}")
        sys.exit(1)

    host = Pluggable()
    try:
        apply_manifest(host, manifest)
    except PluginResolutionError as exc:
        console.print(f"[red]Resolution error:[/red] {exc}")
        sys.exit(1)

    applied = [spec.ref for spec in manifest.enabled_plugins]
    skipped = [spec.ref for spec in manifest.plugins if not spec.enabled]

    if json_output:
        output = {
            "applied": applied,
            "skipped": skipped,
            "entrypoint_groups": manifest.entrypoint_groups,
            "deferred": len(host.deferred),
        }
        console.print_json(json.dumps(output, indent=2))
        return

    console.print(
        Panel(
            f"[bold green]{len(applied)}[/bold green] plugin(s) applied, "
            f"[bold]{len(host.deferred)}[/bold] deferred",
            title="Manifest Applied",
            expand=False,
        )
    )

    if manifest.plugins:
        table = Table(title="Plugins", show_header=True)
        table.add_column("Reference", style="cyan")
        table.add_column("Status", style="yellow")
        table.add_column("Description")
        for spec in manifest.plugins:
            status = "applied" if spec.enabled else "skipped"
            table.add_row(spec.ref, status, spec.description)
        console.print(table)

    for group in manifest.entrypoint_groups:
        console.print(f"[dim]Entry-point group:[/dim] {group}")


if __name__ == "__main__":
    cli()
