"""List command for showing cached packages."""

import asyncio

import click
from rich.console import Console
from rich.table import Table

from ondemand.cli.error_boundary import cli_error_boundary
from ondemand.context import OnDemandContext
from ondemand.models.package import CacheEntry
from ondemand.services.package_service import PackageService


def _entries_table(entries: list[CacheEntry]) -> Table:
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("package")
    table.add_column("version")
    table.add_column("slot", overflow="fold")
    for entry in entries:
        version = entry.version if entry.version is not None else f"[red]? ({entry.problem})[/red]"
        table.add_row(entry.identifier, version, str(entry.slot_path))
    return table


@click.command("list")
@click.pass_obj
@cli_error_boundary
def list_cmd(ctx: OnDemandContext) -> None:
    """List the packages in the cache."""
    service = PackageService(ctx)

    if not service.admin.exists():
        click.echo(f"Package directory does not exist: {ctx.config.package_path}")
        return

    entries = asyncio.run(service.list_packages())
    if len(entries) == 0:
        click.echo("No packages installed")
        return

    click.echo(f"Installed {len(entries)} package(s):\n")
    Console(soft_wrap=True).print(_entries_table(entries))
