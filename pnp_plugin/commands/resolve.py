"""Resolution commands: run one import request through the plugin."""

from __future__ import annotations

import sys

import click
from rich.markup import escape
from rich.table import Table

from ..classifier import DEFAULT_POLICY
from ..classifier import DiagnosticPolicy
from ..conditions import build_condition_sets
from ..console import console
from ..errors import PnpPluginError
from ..externals import is_external
from ..externals import parse_externals
from ..host import PluginHost
from ..models import ImportKind
from ..models import ImportRequest
from ..plugin import DEFAULT_EXTENSIONS
from ..plugin import MATCH_ALL
from ..plugin import pnp_plugin
from ..provider import load_provider_locator
from ..results import ResolveResult
from ..settings import BuildOptions
from ..settings import SettingsManager

KIND_CHOICES = [kind.value for kind in ImportKind] + ["static-import", "url-reference"]


def _build_options(
    settings: SettingsManager,
    platform: str | None,
    externals: tuple[str, ...],
    user_conditions: tuple[str, ...],
) -> BuildOptions:
    """Merge command-line build options over the settings files."""
    options = settings.load_build_options()
    updates = {}
    if platform:
        updates["platform"] = platform
    if externals:
        updates["external"] = list(externals)
    if user_conditions:
        updates["conditions"] = list(user_conditions)
    return options.model_copy(update=updates)


def _print_result(specifier: str, result: ResolveResult | None) -> None:
    if result is None:
        console.print(f"[yellow]{escape(specifier)}[/yellow] is not managed by the provider [dim](delegated)[/dim]")
        return

    table = Table(title=f"Resolution of {escape(specifier)}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    if result.external:
        table.add_row("External", "yes")
    else:
        table.add_row("Namespace", result.namespace or "")
        table.add_row("Path", f"[green]{escape(result.path or '')}[/green]")
    for message in result.errors:
        table.add_row("Error", f"[red]{escape(message.text)}[/red]")
    for message in result.warnings:
        table.add_row("Warning", f"[yellow]{escape(message.text)}[/yellow]")
    for watch_file in result.watch_files:
        table.add_row("Watch", escape(watch_file))

    console.print(table)


@click.command()
@click.argument("specifier")
@click.option("--importer", default="", help="File containing the import (empty for entry points)")
@click.option("--resolve-dir", default="", help="Directory to resolve from")
@click.option(
    "--kind",
    type=click.Choice(KIND_CHOICES),
    default=ImportKind.STATIC_IMPORT.value,
    show_default=True,
    help="How the import was encountered",
)
@click.option("--platform", help="Target platform (default: settings or 'browser')")
@click.option("--external", "-e", "externals", multiple=True, help="Specifier to leave external (repeatable)")
@click.option("--condition", "-c", "user_conditions", multiple=True, help="Extra export condition (repeatable)")
@click.option("--provider", "provider_ref", help="Provider locator as 'module:attribute'")
@click.option("--base-dir", help="Importing context for entry points")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def resolve(
    ctx: click.Context,
    specifier: str,
    importer: str,
    resolve_dir: str,
    kind: str,
    platform: str | None,
    externals: tuple[str, ...],
    user_conditions: tuple[str, ...],
    provider_ref: str | None,
    base_dir: str | None,
    as_json: bool,
):
    """Resolve SPECIFIER as the plugin would during a build."""
    settings: SettingsManager = ctx.obj["settings"]

    try:
        plugin_settings = settings.load_plugin_settings()
        build_options = _build_options(settings, platform, externals, user_conditions)

        provider_ref = provider_ref or plugin_settings.provider
        if not provider_ref:
            console.print("[red]Error:[/red] No provider configured")
            console.print("[dim]Pass --provider module:attribute or set plugin.provider in settings[/dim]")
            sys.exit(1)

        policy = DEFAULT_POLICY
        if plugin_settings.downgrade_kinds is not None:
            policy = DiagnosticPolicy.downgrading(plugin_settings.downgrade_kinds)

        plugin = pnp_plugin(
            load_provider_locator(provider_ref),
            base_dir=base_dir or plugin_settings.base_dir,
            extensions=plugin_settings.extensions or DEFAULT_EXTENSIONS,
            filter=plugin_settings.filter or MATCH_ALL,
            policy=policy,
        )
        host = PluginHost(build_options, plugins=[plugin])

        request = ImportRequest(
            specifier=specifier,
            importer=importer,
            resolve_dir=resolve_dir,
            kind=ImportKind(kind),
        )
        result = host.resolve(request)
    except PnpPluginError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if as_json:
        click.echo("null" if result is None else result.model_dump_json(indent=2))
    else:
        _print_result(specifier, result)

    if result is not None and result.errors:
        sys.exit(1)


@click.command()
@click.argument("path")
@click.option("--external", "-e", "externals", multiple=True, required=True, help="External entry (repeatable)")
def match(path: str, externals: tuple[str, ...]):
    """Check whether PATH matches the external entries."""
    if is_external(path, parse_externals(externals)):
        console.print(f"[green]{escape(path)}[/green] is external")
    else:
        console.print(f"[yellow]{escape(path)}[/yellow] is not external")


@click.command()
@click.option("--platform", help="Target platform (default: settings or 'browser')")
@click.option("--condition", "-c", "user_conditions", multiple=True, help="Extra export condition (repeatable)")
@click.pass_context
def conditions(ctx: click.Context, platform: str | None, user_conditions: tuple[str, ...]):
    """Show the export conditions applied per import kind."""
    settings: SettingsManager = ctx.obj["settings"]
    try:
        options = _build_options(settings, platform, (), user_conditions)
    except PnpPluginError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    sets = build_condition_sets(options.conditions, options.platform)

    table = Table(title=f"Conditions (platform: {options.platform})", show_header=True, header_style="bold cyan")
    table.add_column("Set", style="green")
    table.add_column("Used for", style="dim")
    table.add_column("Conditions")
    table.add_row("default", "entry points, CSS, URLs", ", ".join(sorted(sets.default)))
    table.add_row("import", "import, import()", ", ".join(sorted(sets.import_)))
    table.add_row("require", "require, require.resolve", ", ".join(sorted(sets.require)))
    console.print(table)
