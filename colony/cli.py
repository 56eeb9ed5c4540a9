"""
Colony command line.

Thin glue over the modules: resolves the hive, narrows nodes with --on and
runs commands with live output. All logic lives in colony.modules.
"""

import asyncio
import logging
from typing import Tuple

import click
from click.core import ParameterSource
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from colony import __version__
from colony.config import EnvConfigProvider
from colony.errors import ColonyError, CommandFailedError
from colony.logging_config import configure_logging
from colony.modules.executor import Command, CommandExecution
from colony.modules.hive import NixFlakeResolver, hive_from_args
from colony.modules.nodes import load_registry
from colony.modules.progress import ConsoleProgress
from colony.modules.selector import filter_nodes, selector_option

logger = logging.getLogger("colony.cli")

CONFIG_HELP = """Path to a Hive expression.

If this argument is not specified, Colony will search upwards from the current working directory for a file named "flake.nix" or "hive.nix". This behavior is disabled if --config/-f is given explicitly."""


@click.group()
@click.version_option(__version__, prog_name="colony")
@click.option(
    "-f",
    "--config",
    "config",
    metavar="CONFIG",
    default="hive.nix",
    show_default=True,
    help=CONFIG_HELP,
)
@click.option("--show-trace", is_flag=True, help="Passes --show-trace to Nix commands")
@click.pass_context
def cli(ctx: click.Context, config: str, show_trace: bool):
    """NixOS deployment tool."""
    provider = EnvConfigProvider()
    configure_logging(provider.get_logging_config().level)

    hive_config = provider.get_hive_config()
    ctx.obj = {
        "provider": provider,
        "config": config,
        # The default is a placeholder; only an explicit value disables the search
        "explicit": ctx.get_parameter_source("config") != ParameterSource.DEFAULT,
        "show_trace": show_trace or hive_config.show_trace,
    }


@cli.command()
@click.pass_obj
def locate(obj):
    """Show which hive configuration would be used."""
    hive_config = obj["provider"].get_hive_config()
    resolver = NixFlakeResolver(hive_config.nix_bin)

    try:
        hive = asyncio.run(
            hive_from_args(obj["config"], obj["explicit"], obj["show_trace"], resolver=resolver)
        )
    except ColonyError as e:
        raise click.ClickException(str(e)) from e

    logger.debug(f"Using {hive!r}")
    click.echo(f"{hive.path.kind.value}: {hive.path}")
    if hive.show_trace:
        click.echo("show-trace: enabled")


@cli.command()
@click.option(
    "--registry",
    "registry",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML or JSON file mapping node names to their attributes",
)
@selector_option
def nodes(registry: str, on: str):
    """List the nodes a selector applies to."""
    try:
        node_registry = load_registry(registry)
        selected = filter_nodes(node_registry, on)
    except (ColonyError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    table = Table(title=f"{len(selected)} of {len(node_registry)} nodes selected")
    table.add_column("Node", style="cyan")
    table.add_column("Tags")
    for name in sorted(selected):
        table.add_row(name, ", ".join(sorted(node_registry[name].tags)))

    Console().print(table)


@cli.command(context_settings={"ignore_unknown_options": True})
@click.option("--label", "label", default=None, help="Prefix for output lines")
@click.argument("program")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def run(obj, label: str, program: str, args: Tuple[str, ...]):
    """Run a command with live output."""
    executor_config = obj["provider"].get_executor_config()
    console = Console(highlight=False)
    execution = CommandExecution(
        Command(program, list(args)),
        ConsoleProgress(label or program, console=console),
        stream_limit=executor_config.stream_limit,
    )

    try:
        asyncio.run(execution.run())
    except CommandFailedError as e:
        # Output was already streamed line by line
        console.print(f"[bold red]Command failed with {e.status}[/]")
        raise SystemExit(1)
    except ColonyError as e:
        raise click.ClickException(str(e)) from e


def main():
    """Main entry point."""
    load_dotenv()
    cli()


if __name__ == "__main__":
    main()
