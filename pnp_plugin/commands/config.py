"""Settings commands: inspect and update plugin settings."""

from __future__ import annotations

import sys

import click
import yaml
from rich.markup import escape

from ..console import console
from ..errors import PnpPluginError
from ..settings import SCOPES
from ..settings import SettingsManager


@click.group(invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context):
    """Manage plugin settings."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@config.command(name="show")
@click.pass_context
def config_show(ctx: click.Context):
    """Show effective settings (user < project < local)."""
    settings: SettingsManager = ctx.obj["settings"]

    try:
        plugin_settings = settings.load_plugin_settings()
        build_options = settings.load_build_options()
    except PnpPluginError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    effective = {
        "plugin": plugin_settings.model_dump(mode="json", exclude_none=True),
        "build": build_options.model_dump(mode="json"),
    }
    console.print("[bold]Effective settings:[/bold]")
    click.echo(yaml.safe_dump(effective, default_flow_style=False, sort_keys=False))


@config.command(name="set")
@click.argument("section", type=click.Choice(["plugin", "build"]))
@click.argument("key")
@click.argument("value")
@click.option("--scope", type=click.Choice(list(SCOPES)), default="project", show_default=True)
@click.pass_context
def config_set(ctx: click.Context, section: str, key: str, value: str, scope: str):
    """Set SECTION.KEY to VALUE (parsed as YAML, e.g. "[a, b]")."""
    settings: SettingsManager = ctx.obj["settings"]
    try:
        parsed = yaml.safe_load(value)
        settings.set_value(section, key, parsed, scope=scope)
    except (PnpPluginError, OSError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    console.print(f"[green]✓ Set {section}.{key}[/green] ({scope})")
