"""Remove command for deleting a cached package."""

import asyncio

import click

from ondemand.cli.error_boundary import cli_error_boundary
from ondemand.context import OnDemandContext
from ondemand.services.package_service import PackageService


@click.command("remove")
@click.argument("identifier")
@click.pass_obj
@cli_error_boundary
def remove_cmd(ctx: OnDemandContext, identifier: str) -> None:
    """Remove a package's cache slot."""
    removed = asyncio.run(PackageService(ctx).remove(identifier))
    if not removed:
        click.echo(f"Error: Package '{identifier}' does not exist", err=True)
        raise SystemExit(1)
    click.echo(f"✓ Removed {identifier}")
