"""Add command for installing a package into the cache."""

import asyncio

import click

from ondemand.cli.error_boundary import cli_error_boundary
from ondemand.context import OnDemandContext
from ondemand.models.package import PackageSpec
from ondemand.services.package_service import PackageService


@click.command("add")
@click.argument("identifier")
@click.argument("version", required=False)
@click.pass_obj
@cli_error_boundary
def add_cmd(ctx: OnDemandContext, identifier: str, version: str | None) -> None:
    """Install a package into the cache, replacing any cached copy.

    Examples:

        # Latest release
        ondemand add requests

        # A specific version
        ondemand add requests 2.32.3
    """
    spec = PackageSpec(identifier=identifier, version=version)
    asyncio.run(PackageService(ctx).install(spec))
    click.echo(f"✓ Installed {identifier} ({spec.requested_version})")
