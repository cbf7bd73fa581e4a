"""Installs a package into its cache slot with pip."""

import asyncio
import json
import logging
import shutil
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from ondemand.errors import FilesystemError, InstallError, ProcessError, SpawnError
from ondemand.integrations.executor.abc import Executor
from ondemand.models.package import PackageSpec
from ondemand.slots import manifest_path, site_dir, slot_path

logger = logging.getLogger(__name__)


def build_install_command(
    python: str, spec: PackageSpec, target: Path, index_url: str
) -> list[str]:
    """Build the pip invocation that installs spec into target.

    The installer empties target first; --upgrade only keeps pip from
    refusing to write over entries it finds there.
    """
    return [
        python,
        "-m",
        "pip",
        "install",
        "--target",
        str(target),
        "--upgrade",
        "--no-input",
        "--disable-pip-version-check",
        "--index-url",
        index_url,
        spec.requirement,
    ]


def _prepare_slot(slot: Path, spec: PackageSpec) -> None:
    try:
        slot.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(slot, "create directory", str(e)) from e

    # pip --target only replaces same-named entries, so an older .dist-info
    # would survive a reinstall of a different version
    site = site_dir(slot)
    if site.exists():
        try:
            shutil.rmtree(site)
        except OSError as e:
            raise FilesystemError(site, "clear site directory", str(e)) from e

    manifest = {"identifier": spec.identifier, "version": spec.requested_version}
    target = manifest_path(slot)
    try:
        target.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise FilesystemError(target, "write manifest", str(e)) from e


class Installer:
    """Fetches a package into its cache slot.

    The slot directory and its manifest are written, and the previous
    site-packages removed, before the index is resolved and before pip runs.
    An interrupted install therefore leaves a slot with a manifest and no
    package rather than a mix of old and new files. Failed installs are not
    cleaned up.
    """

    def __init__(
        self,
        package_path: Path,
        executor: Executor,
        resolve_index: Callable[[], Awaitable[str]],
        python: str | None = None,
    ) -> None:
        """Create installer.

        Args:
            package_path: Cache root holding every slot
            executor: Executor that runs pip
            resolve_index: Returns the package index URL, resolving it lazily
            python: Interpreter whose pip installs packages, defaults to
                sys.executable so installed wheels match the importing process
        """
        self._package_path = package_path
        self._executor = executor
        self._resolve_index = resolve_index
        self._python = python or sys.executable

    async def install(self, spec: PackageSpec) -> None:
        """Install spec into its slot, replacing earlier contents.

        Raises:
            FilesystemError: If the slot or its manifest cannot be written
            ResolutionError: If the package index URL cannot be discovered
            InstallError: If pip could not be started or failed
        """
        slot = slot_path(self._package_path, spec.identifier)

        logger.info("Making directory '%s'.", slot)
        await asyncio.to_thread(_prepare_slot, slot, spec)

        index_url = await self._resolve_index()

        logger.info("Installing '%s' (%s)...", spec.identifier, spec.requested_version)
        command = build_install_command(self._python, spec, site_dir(slot), index_url)
        try:
            await self._executor.run(command, cwd=slot)
        except (SpawnError, ProcessError) as e:
            raise InstallError(spec.identifier, str(e)) from e

        logger.info("Installed package '%s'.", spec.identifier)
