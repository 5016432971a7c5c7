"""Root CLI group for graphctl with global flags and command registration."""

from __future__ import annotations

import click

from graphctl import __version__
from graphctl.commands import register_commands
from graphctl.commands._context import AppContext
from graphctl.config.settings import GraphctlSettings
from graphctl.domain.types import GraphType


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="graphctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-t",
    "--graph-type",
    type=click.Choice([t.value for t in GraphType]),
    default=None,
    help="Graph type (default from [engine] graph_type).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    graph_type: str | None,
) -> None:
    """graphctl — concurrent in-memory graph analysis."""
    ctx.ensure_object(dict)
    settings = GraphctlSettings.from_cli(
        config_path=config_path,
        graph_type=graph_type,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
