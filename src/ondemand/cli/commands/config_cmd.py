"""Config commands."""

import asyncio

import click

from ondemand.cli.error_boundary import cli_error_boundary
from ondemand.context import OnDemandContext
from ondemand.services.package_service import PackageService


@click.group("config")
def config_group() -> None:
    """Inspect ondemand configuration."""


@config_group.command("show")
@click.pass_obj
def show_cmd(ctx: OnDemandContext) -> None:
    """Print the effective configuration."""
    click.echo(f"config file:  {ctx.config_store.path()}")
    click.echo(f"package_path: {ctx.config.package_path}")
    click.echo(f"registry:     {ctx.config.registry or '(resolved on first install)'}")


@config_group.command("resolve-registry")
@click.pass_obj
@cli_error_boundary
def resolve_registry_cmd(ctx: OnDemandContext) -> None:
    """Discover the package index now and save it to the config file."""
    url = asyncio.run(PackageService(ctx).resolve_registry())
    click.echo(url)
