"""Import command for loading a package through the cache."""

import asyncio

import click

from ondemand.cli.error_boundary import cli_error_boundary
from ondemand.context import OnDemandContext
from ondemand.models.package import PackageSpec, RetryPolicy
from ondemand.services.package_service import PackageService


@click.command("import")
@click.argument("identifier")
@click.argument("version", required=False)
@click.option(
    "--max-retries",
    type=click.IntRange(min=0),
    default=3,
    show_default=True,
    help="Forced reinstalls allowed after a failed load.",
)
@click.option("--force", is_flag=True, help="Reinstall even if the package is cached.")
@click.pass_obj
@cli_error_boundary
def import_cmd(
    ctx: OnDemandContext,
    identifier: str,
    version: str | None,
    max_retries: int,
    force: bool,
) -> None:
    """Load a package, installing it first if it is not cached.

    Reports where the module was loaded from. No code is evaluated against it.
    """
    spec = PackageSpec(identifier=identifier, version=version)
    policy = RetryPolicy(max_retries=max_retries, force_install=force)
    module = asyncio.run(PackageService(ctx).safe_import(spec, policy))

    click.echo(f"✓ Loaded {module.__name__}")
    location = getattr(module, "__file__", None)
    if location:
        click.echo(f"  from {location}")
    module_version = getattr(module, "__version__", None)
    if module_version:
        click.echo(f"  version {module_version}")
