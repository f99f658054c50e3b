"""Command-line entry point for the PnP resolution plugin."""

from __future__ import annotations

from pathlib import Path

import click

from .commands.config import config
from .commands.resolve import conditions
from .commands.resolve import match
from .commands.resolve import resolve
from .logging_setup import init_json_logging
from .settings import SettingsManager


@click.group(invoke_without_command=True)
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level for the JSONL log",
)
@click.option(
    "--settings-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Project settings directory (default: .pnp-plugin)",
)
@click.pass_context
def cli(ctx: click.Context, log_file: str | None, log_level: str | None, settings_dir: Path | None):
    """Resolve imports through a Plug'n'Play package provider."""
    ctx.ensure_object(dict)
    ctx.obj["settings"] = SettingsManager(settings_dir=settings_dir)

    if log_file or log_level:
        init_json_logging(log_file, log_level)

    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


cli.add_command(resolve)
cli.add_command(match)
cli.add_command(conditions)
cli.add_command(config)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
