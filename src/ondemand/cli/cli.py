import logging
from pathlib import Path

import click

from ondemand import __version__
from ondemand.cli.commands.add_cmd import add_cmd
from ondemand.cli.commands.config_cmd import config_group
from ondemand.cli.commands.import_cmd import import_cmd
from ondemand.cli.commands.list_cmd import list_cmd
from ondemand.cli.commands.remove_cmd import remove_cmd
from ondemand.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of ~/.ondemand/config.toml.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Install, cache and load Python packages on demand."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(config_path)
        except ValueError as e:
            raise click.ClickException(str(e)) from None


cli.add_command(list_cmd)
cli.add_command(add_cmd)
cli.add_command(remove_cmd)
cli.add_command(import_cmd)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `ondemand` console script."""
    cli()
